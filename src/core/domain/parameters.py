"""Modelo de parámetros de URL (Pydantic v2).

Por qué un modelo propio:
- Una query se construye como una secuencia ordenada de `URLParameter`; el
  orden de inserción se conserva hasta la URL final.
- La identidad (`identity`) permite coalescer parámetros repetidos en vez de
  duplicarlos.

Formato en el wire:
- filter        -> Filter=Field:op:v1,v2
- filterType    -> Filter_<Scope>=Field:op:v
- sort/sortType -> Sort=Field:asc / Sort_<Scope>=Field:desc
- stats         -> Stats=Reviews,Questions (también FilteredStats)
- include       -> Include=Answers
- includeLimit  -> Limit_<Scope>=10
- field         -> Name=value
- pagination    -> Limit=10 / Offset=20
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from core.domain.fields import ContentType, FilterOperator, SortOrder


class ParameterKind(str, Enum):
    FIELD = "field"
    FILTER = "filter"
    FILTER_TYPE = "filterType"
    INCLUDE = "include"
    INCLUDE_LIMIT = "includeLimit"
    PAGINATION = "pagination"
    SORT = "sort"
    SORT_TYPE = "sortType"
    STATS = "stats"


_FILTER_KINDS = frozenset({ParameterKind.FILTER, ParameterKind.FILTER_TYPE})
_LIST_KINDS = frozenset({ParameterKind.INCLUDE, ParameterKind.STATS})

# Claves que la API acepta como lista separada por comas.
_JOINABLE_KEYS = frozenset({"Include", "Stats", "FilteredStats"})


def render_value(value: Any) -> str:
    """Convierte un valor de filtro a texto y escapa `\\`, `,` y `:`."""

    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, Enum):
        text = str(value.value)
    elif isinstance(value, datetime):
        text = str(int(value.timestamp()))
    else:
        text = str(value)
    return text.replace("\\", "\\\\").replace(",", "\\,").replace(":", "\\:")


class FilterClause(BaseModel):
    """Un término `op:value` dentro de un parámetro de filtro."""

    model_config = ConfigDict(frozen=True)

    operator: FilterOperator
    value: str


class URLParameter(BaseModel):
    """Un parámetro de query tipado.

    Campos usados según `kind`:
    - filter/filterType: `name` (campo), `scope` (solo filterType), `clauses`
    - sort/sortType: `name`, `scope` (solo sortType), `order`
    - stats: `name` ("Stats" o "FilteredStats"), `values`
    - include/includeLimit: `name` (content type), `limit` (solo includeLimit)
    - field: `name` (clave), `values`
    - pagination: `name` ("Limit" u "Offset"), `limit`
    """

    model_config = ConfigDict(frozen=True)

    kind: ParameterKind
    name: str = Field(..., min_length=1)
    scope: ContentType | None = None
    clauses: tuple[FilterClause, ...] = ()
    order: SortOrder | None = None
    values: tuple[str, ...] = ()
    limit: int | None = Field(default=None, ge=0)

    @property
    def identity(self) -> tuple[ParameterKind, ContentType | None, str]:
        return (self.kind, self.scope, self.name)

    @property
    def operator(self) -> FilterOperator | None:
        """Operador común de las cláusulas (None si no hay o si son mixtas)."""

        operators = {c.operator for c in self.clauses}
        if len(operators) != 1:
            return None
        return next(iter(operators))

    def merge(self, other: URLParameter) -> URLParameter:
        """Fusiona `other` (misma identidad) sobre este parámetro.

        - include/stats: unión de valores conservando el primer orden visto
        - filter/filterType: concatenación de cláusulas (OR)
        - resto: gana el último
        """

        if other.identity != self.identity:
            raise ValueError(f"Cannot merge {other.identity} into {self.identity}")

        if self.kind in _LIST_KINDS:
            merged = list(self.values)
            merged.extend(v for v in other.values if v not in merged)
            return self.model_copy(update={"values": tuple(merged)})

        if self.kind in _FILTER_KINDS:
            clauses = list(self.clauses)
            clauses.extend(c for c in other.clauses if c not in clauses)
            return self.model_copy(update={"clauses": tuple(clauses)})

        return other

    def to_pair(self) -> tuple[str, str]:
        kind = self.kind
        if kind in _FILTER_KINDS:
            key = "Filter" if kind is ParameterKind.FILTER else f"Filter_{self._scope_name()}"
            return key, f"{self.name}:{self._render_clauses()}"
        if kind in (ParameterKind.SORT, ParameterKind.SORT_TYPE):
            key = "Sort" if kind is ParameterKind.SORT else f"Sort_{self._scope_name()}"
            order = (self.order or SortOrder.ASCENDING).value
            return key, f"{self.name}:{order}"
        if kind is ParameterKind.STATS:
            return self.name, ",".join(self.values)
        if kind is ParameterKind.INCLUDE:
            return "Include", self.name
        if kind is ParameterKind.INCLUDE_LIMIT:
            return f"Limit_{self.name}", str(self.limit or 0)
        if kind is ParameterKind.PAGINATION:
            return self.name, str(self.limit or 0)
        return self.name, ",".join(self.values)

    def _scope_name(self) -> str:
        if self.scope is None:
            raise ValueError(f"{self.kind.value} parameter '{self.name}' requires a scope")
        return self.scope.value

    def _render_clauses(self) -> str:
        if self.operator is not None:
            joined = ",".join(c.value for c in self.clauses)
            return f"{self.operator.value}:{joined}"
        return ",".join(f"{c.operator.value}:{c.value}" for c in self.clauses)


def make_parameter(
    kind: ParameterKind,
    name: str,
    operator: FilterOperator | None = None,
    value: Any = None,
    limit: int | None = None,
    *,
    scope: ContentType | None = None,
    order: SortOrder | None = None,
) -> URLParameter:
    """Construye un `URLParameter` sin validar combinaciones.

    Las combinaciones ilegales se evitan aguas arriba (preflight de cada
    query), no aquí.
    """

    clauses: tuple[FilterClause, ...] = ()
    values: tuple[str, ...] = ()
    if kind in _FILTER_KINDS:
        clauses = (
            FilterClause(
                operator=operator or FilterOperator.EQUAL_TO,
                value=render_value(value),
            ),
        )
    elif value is not None:
        raw = value if isinstance(value, (list, tuple)) else [value]
        values = tuple(render_value(v) if isinstance(v, (bool, Enum)) else str(v) for v in raw)

    return URLParameter(
        kind=kind,
        name=name,
        scope=scope,
        clauses=clauses,
        order=order,
        values=values,
        limit=limit,
    )


def serialize_parameters(parameters: Iterable[URLParameter]) -> list[tuple[str, str]]:
    """Serializa parámetros a pares (clave, valor) respetando el orden.

    `Include`, `Stats` y `FilteredStats` repetidos se pliegan en el primer par
    como lista separada por comas.
    """

    pairs: list[tuple[str, str]] = []
    joined_at: dict[str, int] = {}
    for parameter in parameters:
        key, value = parameter.to_pair()
        if key not in _JOINABLE_KEYS:
            pairs.append((key, value))
            continue
        if key not in joined_at:
            joined_at[key] = len(pairs)
            pairs.append((key, value))
            continue
        index = joined_at[key]
        existing = pairs[index][1].split(",")
        existing.extend(v for v in value.split(",") if v not in existing)
        pairs[index] = (key, ",".join(existing))
    return pairs
