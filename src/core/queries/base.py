"""Query builder base y capacidades encadenables.

Por qué clases por capacidad (filtrable, incluible, ordenable, estadísticas):
- Cada query concreta compone solo lo que su endpoint soporta y declara qué
  content types acepta (`allowed_*`).
- Todos los métodos de construcción devuelven la misma instancia y no hacen
  I/O; la red solo se toca en `fetch` / `execute`.

Los valores ilegales para una query (filtro, include, sort o stat de un
content type no soportado) se descartan en silencio con un log DEBUG.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from core.config import ConversationsSettings
from core.domain.fields import (
    ContentType,
    FilterOperator,
    FilterTuple,
    QueryField,
    SortOrder,
    content_type_of,
)
from core.domain.models import ConversationsModel
from core.domain.parameters import ParameterKind, URLParameter, make_parameter, serialize_parameters
from core.domain.response import EntityT, QueryResponse
from core.queries.expressions import expression_for, flatten, group_filters
from core.services import execution

if TYPE_CHECKING:
    from core.interfaces.analytics import AnalyticsSink
    from core.interfaces.transport import RequestDescriptor, Transport

logger = logging.getLogger(__name__)

QueryT = TypeVar("QueryT", bound="ConversationsQuery[Any]")

Handler = Callable[[QueryResponse[Any]], Any]

DEFAULT_INCLUDE_LIMIT = 10


class ConversationsQuery(Generic[EntityT]):
    """Contenedor mutable y ordenado de parámetros para un tipo de entidad."""

    endpoint: ClassVar[str]
    entity_type: ClassVar[type[ConversationsModel]]
    content_type: ClassVar[ContentType]

    def __init__(
        self,
        *,
        settings: ConversationsSettings | None = None,
        transport: Transport | None = None,
        analytics: AnalyticsSink | None = None,
    ) -> None:
        self._parameters: list[URLParameter] = []
        self._settings = settings
        self._transport = transport
        self._analytics = analytics
        self._handler: Handler | None = None
        self._limit: int | None = None
        self._offset: int = 0

    @property
    def settings(self) -> ConversationsSettings:
        if self._settings is None:
            self._settings = ConversationsSettings()
        return self._settings

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            from adapters.http_client import HttpxTransport  # noqa: PLC0415

            self._transport = HttpxTransport(self.settings)
        return self._transport

    @property
    def analytics_sink(self) -> AnalyticsSink:
        if self._analytics is None:
            from adapters.analytics_sink import LoggingAnalyticsSink  # noqa: PLC0415

            self._analytics = LoggingAnalyticsSink()
        return self._analytics

    @property
    def parameters(self) -> tuple[URLParameter, ...]:
        """Secuencia completa de parámetros (builder + paginación)."""

        return (*self._parameters, *self._pagination())

    def add_parameter(self: QueryT, parameter: URLParameter, coalesce: bool = False) -> QueryT:
        """Añade un parámetro.

        Con `coalesce=True`, si ya existe uno con la misma identidad se fusiona
        en su posición; si no, se añade al final. Sin coalesce siempre se añade.
        """

        if coalesce:
            for index, existing in enumerate(self._parameters):
                if existing.identity == parameter.identity:
                    self._parameters[index] = existing.merge(parameter)
                    return self
        self._parameters.append(parameter)
        return self

    def configure(self: QueryT, settings: ConversationsSettings) -> QueryT:
        self._settings = settings
        return self

    def with_transport(self: QueryT, transport: Transport) -> QueryT:
        self._transport = transport
        return self

    def with_analytics(self: QueryT, sink: AnalyticsSink) -> QueryT:
        self._analytics = sink
        return self

    def handler(self: QueryT, handler: Handler) -> QueryT:
        self._handler = handler
        return self

    def query_items(self) -> list[tuple[str, str]]:
        return serialize_parameters(self.parameters)

    def build_request(self) -> RequestDescriptor:
        return execution.build_request(self)

    def postflight(self, results: list[EntityT]) -> None:
        """Hook de efectos secundarios sobre resultados exitosos (no-op)."""

        return None

    def track(self, event: Any) -> None:
        self.analytics_sink.track(event, self.settings.analytics)

    async def fetch(self) -> QueryResponse[EntityT]:
        return await execution.fetch(self)

    def execute(self, handler: Handler | None = None) -> asyncio.Task[None]:
        """Programa la ejecución y vuelve de inmediato.

        El handler se invoca exactamente una vez, desde una task del loop en
        curso, nunca antes de que `execute` retorne.
        """

        handler = handler or self._handler
        if handler is None:
            raise ValueError(f"{type(self).__name__}.execute() requires a handler")
        return execution.execute(self, handler)

    def _pagination(self) -> list[URLParameter]:
        limit = self.settings.default_limit if self._limit is None else self._limit
        limit = min(limit, self.settings.max_limit)
        out: list[URLParameter] = []
        if limit > 0:
            out.append(make_parameter(ParameterKind.PAGINATION, "Limit", limit=limit))
        if self._offset > 0:
            out.append(make_parameter(ParameterKind.PAGINATION, "Offset", limit=self._offset))
        return out

    def _scoped(self, field: QueryField, allowed: frozenset[ContentType]) -> ContentType | None:
        scope = content_type_of(field)
        if scope not in allowed:
            logger.debug("%s ignores %s fields", type(self).__name__, scope.value)
            return None
        return scope


class PagedQuery(ConversationsQuery[EntityT]):
    """Query de listado con `Limit` / `Offset`."""

    def __init__(self, *, limit: int | None = None, offset: int = 0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._limit = None if limit is None else max(0, limit)
        self._offset = max(0, offset)


class SingleEntityQuery(ConversationsQuery[EntityT]):
    """Query de display de una entidad: no envía paginación."""

    def _pagination(self) -> list[URLParameter]:
        return []


class FilterableQuery(ConversationsQuery[EntityT]):
    allowed_filter_scopes: ClassVar[frozenset[ContentType]] = frozenset()

    def filter(self: QueryT, *apply: FilterTuple) -> QueryT:
        """Aplica tuplas `(campo, operador, valor)`.

        Varias tuplas sobre el mismo campo se combinan con OR; campos distintos
        con AND.
        """

        for group in group_filters(*apply):
            for parameter in flatten(expression_for(group), self._preflight):
                self.add_parameter(parameter)
        return self

    def _preflight(self, field: QueryField, operator: FilterOperator, value: Any) -> URLParameter | None:
        scope = self._scoped(field, self.allowed_filter_scopes)
        if scope is None:
            return None
        if scope is self.content_type:
            return make_parameter(ParameterKind.FILTER, field.value, operator, value)
        return make_parameter(ParameterKind.FILTER_TYPE, field.value, operator, value, scope=scope)


class IncludeableQuery(ConversationsQuery[EntityT]):
    allowed_includes: ClassVar[frozenset[ContentType]] = frozenset()

    def include(self: QueryT, kind: ContentType, limit: int = DEFAULT_INCLUDE_LIMIT) -> QueryT:
        """Incluye entidades relacionadas; `limit=0` no envía `Limit_<Kind>`."""

        if kind not in self.allowed_includes:
            logger.debug("%s ignores include %s", type(self).__name__, kind.value)
            return self
        self.add_parameter(make_parameter(ParameterKind.INCLUDE, kind.value), coalesce=True)
        if limit > 0:
            self.add_parameter(
                make_parameter(ParameterKind.INCLUDE_LIMIT, kind.value, limit=limit),
                coalesce=True,
            )
        return self


class SortableQuery(ConversationsQuery[EntityT]):
    allowed_sort_scopes: ClassVar[frozenset[ContentType]] = frozenset()

    def sort(self: QueryT, on: QueryField, order: SortOrder = SortOrder.ASCENDING) -> QueryT:
        scope = self._scoped(on, self.allowed_sort_scopes)
        if scope is None:
            return self
        if scope is self.content_type:
            parameter = make_parameter(ParameterKind.SORT, on.value, order=order)
        else:
            parameter = make_parameter(ParameterKind.SORT_TYPE, on.value, order=order, scope=scope)
        return self.add_parameter(parameter)


class StatableQuery(ConversationsQuery[EntityT]):
    allowed_stats: ClassVar[frozenset[ContentType]] = frozenset()

    def stats(self: QueryT, kind: ContentType) -> QueryT:
        return self._add_stat("Stats", kind)

    def filtered_stats(self: QueryT, kind: ContentType) -> QueryT:
        return self._add_stat("FilteredStats", kind)

    def incentivized_stats(self: QueryT, value: bool) -> QueryT:
        parameter = make_parameter(ParameterKind.FIELD, "IncentivizedStats", value=value)
        return self.add_parameter(parameter, coalesce=True)

    def _add_stat(self: QueryT, name: str, kind: ContentType) -> QueryT:
        if kind not in self.allowed_stats:
            logger.debug("%s ignores %s for %s", type(self).__name__, name, kind.value)
            return self
        return self.add_parameter(make_parameter(ParameterKind.STATS, name, value=kind), coalesce=True)
