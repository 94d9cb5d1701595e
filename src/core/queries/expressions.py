"""Álgebra de expresiones de filtro.

Reglas:
- Las tuplas `(campo, operador, valor)` que comparten campo forman un grupo y
  se combinan con OR.
- Grupos distintos se combinan con AND (un parámetro `Filter` por grupo).
- Un grupo de una sola tupla es un AND de un elemento; de dos o más, un OR.

El `preflight` de cada query decide qué campos son legales. Si devuelve
`None`, la tupla se descarta en silencio (política permisiva: no se lanzan
errores de construcción).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from core.domain.fields import FilterOperator, FilterTuple, QueryField
from core.domain.parameters import URLParameter

logger = logging.getLogger(__name__)

Preflight = Callable[[QueryField, FilterOperator, Any], Optional[URLParameter]]

FilterGroup = tuple[FilterTuple, ...]


class ExpressionKind(str, Enum):
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class FilterExpression:
    kind: ExpressionKind
    filters: FilterGroup


def _group_key(field: QueryField) -> tuple[type, str]:
    # Los miembros str-Enum de clases distintas con el mismo valor ("Id")
    # son iguales entre sí; la clase forma parte de la clave.
    return (type(field), field.value)


def group_filters(*tuples: FilterTuple) -> list[FilterGroup]:
    """Agrupa tuplas por campo, en orden de primera aparición."""

    groups: dict[tuple[type, str], list[FilterTuple]] = {}
    for item in tuples:
        groups.setdefault(_group_key(item[0]), []).append(item)
    return [tuple(group) for group in groups.values()]


def expression_for(group: FilterGroup) -> FilterExpression:
    kind = ExpressionKind.OR if len(group) > 1 else ExpressionKind.AND
    return FilterExpression(kind=kind, filters=tuple(group))


def flatten(expr: FilterExpression, preflight: Preflight) -> list[URLParameter]:
    """Convierte una expresión en parámetros.

    - AND: un parámetro por tupla aceptada.
    - OR: las tuplas aceptadas se fusionan en un único parámetro.
    """

    accepted: list[URLParameter] = []
    for field, operator, value in expr.filters:
        parameter = preflight(field, operator, value)
        if parameter is None:
            logger.debug("Dropping filter %s.%s (not allowed here)", type(field).__name__, field.name)
            continue
        accepted.append(parameter)

    if expr.kind is ExpressionKind.AND:
        return accepted

    merged: list[URLParameter] = []
    for parameter in accepted:
        for index, existing in enumerate(merged):
            if existing.identity == parameter.identity:
                merged[index] = existing.merge(parameter)
                break
        else:
            merged.append(parameter)
    return merged
