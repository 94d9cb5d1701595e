"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El pipeline de ejecución solo depende de `send`; tests y apps pueden
  sustituir el transporte httpx por cualquier otro.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlencode


@dataclass(frozen=True)
class RequestDescriptor:
    """Request ya resuelto: URL base del endpoint + query params ordenados."""

    url: str
    params: tuple[tuple[str, str], ...] = ()
    headers: dict[str, str] = field(default_factory=dict)

    def full_url(self) -> str:
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo de transporte.

    Reglas de diseño:
    - `send` es asíncrono: toda la suspensión ocurre aquí, no en el Core.
    - Devuelve el payload JSON ya decodificado o lanza una excepción; el
      pipeline la entrega tal cual dentro de un `QueryFailure`.
    """

    async def send(self, request: RequestDescriptor) -> dict[str, Any]:
        ...
