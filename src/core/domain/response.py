"""Response envelope: resultado éxito/fallo entregado al handler.

Por qué dos clases en vez de un objeto con campos opcionales:
- Un `QueryFailure` no tiene `results`; acceder a ellos es un error de
  programación (AttributeError), no un estado recuperable.
- Los consumidores discriminan con `isinstance` o con `ok`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class PageMeta:
    """Metadatos de paginación devueltos por la API."""

    limit: int | None = None
    offset: int | None = None
    total_results: int | None = None
    locale: str | None = None


@dataclass(frozen=True)
class QuerySuccess(Generic[EntityT]):
    results: list[EntityT]
    meta: PageMeta = field(default_factory=PageMeta)

    ok = True


@dataclass(frozen=True)
class QueryFailure:
    """Fallo de transporte, de decodificación o reportado por el servidor.

    `error` es la excepción original, sin reinterpretar.
    """

    error: BaseException

    ok = False


QueryResponse = Union[QuerySuccess[EntityT], QueryFailure]
