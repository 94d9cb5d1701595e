"""Pipeline de ejecución de queries.

Estados por ejecución: Built -> Dispatched -> {Decoded-Success, Decoded-Failure}.

Pasos:
1. Serializar parámetros + config (passkey, apiversion) en un `RequestDescriptor`.
2. Entregar el request al transporte (async).
3. Decodificar el payload en entidades tipadas + metadatos de página.
4. Ejecutar el postflight de la query (solo en éxito).
5. Entregar el envelope al handler del caller.

No hay reintentos ni timeouts propios: eso es cosa del transporte. Ningún
fallo atraviesa el handler: config inválida, transporte, decodificación y
errores del servidor terminan en un `QueryFailure`.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable
from urllib.parse import urljoin

from pydantic import ValidationError

from core.domain.errors import APIError, ConversationsError, DecodeError, ServerError
from core.domain.models import ConversationsModel, ResponsePayload
from core.domain.response import PageMeta, QueryFailure, QueryResponse, QuerySuccess
from core.interfaces.transport import RequestDescriptor

if TYPE_CHECKING:
    from core.queries.base import ConversationsQuery

logger = logging.getLogger(__name__)

# Referencias fuertes a las tasks en vuelo (el loop solo guarda weakrefs).
_PENDING: set[asyncio.Task[None]] = set()


def build_request(query: ConversationsQuery[Any]) -> RequestDescriptor:
    settings = query.settings
    params: list[tuple[str, str]] = []
    if settings.api_key:
        params.append(("passkey", settings.api_key))
    params.append(("apiversion", settings.api_version))
    params.extend(query.query_items())
    return RequestDescriptor(
        url=urljoin(settings.base_url, query.endpoint),
        params=tuple(params),
        headers={"Accept": "application/json"},
    )


def decode_response(payload: Any, entity_type: type[ConversationsModel]) -> QuerySuccess[Any]:
    """Decodifica el payload crudo o lanza `DecodeError` / `APIError`."""

    try:
        envelope = ResponsePayload.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected response envelope: {exc.error_count()} error(s)") from exc

    if envelope.has_errors:
        errors: list[ServerError] = []
        for raw in envelope.errors:
            try:
                errors.append(ServerError.model_validate(raw))
            except ValidationError:
                continue
        raise APIError(errors)

    try:
        results = [entity_type.model_validate(item) for item in envelope.results]
    except ValidationError as exc:
        raise DecodeError(f"Results do not match {entity_type.__name__}: {exc.error_count()} error(s)") from exc

    envelope.includes.resolve()
    for entity in results:
        entity.resolve_includes(envelope.includes)

    meta = PageMeta(
        limit=envelope.limit,
        offset=envelope.offset,
        total_results=envelope.total_results,
        locale=envelope.locale,
    )
    return QuerySuccess(results=results, meta=meta)


async def fetch(query: ConversationsQuery[Any]) -> QueryResponse[Any]:
    """Ejecuta la query y devuelve el envelope (nunca lanza por fallos de red/API)."""

    name = type(query).__name__
    try:
        request = build_request(query)
    except Exception as exc:
        logger.warning("%s could not build request: %s", name, exc)
        return QueryFailure(error=exc)
    logger.debug("%s -> %s", name, request.url)

    try:
        payload = await query.transport.send(request)
    except Exception as exc:
        logger.warning("%s transport failure: %s", name, exc)
        return QueryFailure(error=exc)

    try:
        response = decode_response(payload, query.entity_type)
    except ConversationsError as exc:
        logger.warning("%s decode failure: %s", name, exc)
        return QueryFailure(error=exc)

    try:
        query.postflight(response.results)
    except Exception:
        logger.exception("%s postflight hook failed", name)

    logger.debug("%s <- %d result(s)", name, len(response.results))
    return response


async def _deliver(query: ConversationsQuery[Any], handler: Callable[[QueryResponse[Any]], Any]) -> None:
    response = await fetch(query)
    try:
        outcome = handler(response)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception:
        logger.exception("Handler for %s raised", type(query).__name__)


def execute(
    query: ConversationsQuery[Any],
    handler: Callable[[QueryResponse[Any]], Any],
) -> asyncio.Task[None]:
    """Programa la query en el loop en curso y devuelve la task sin esperar.

    Requiere un event loop en ejecución (lanza `RuntimeError` si no lo hay).
    """

    loop = asyncio.get_running_loop()
    task = loop.create_task(_deliver(query, handler))
    _PENDING.add(task)
    task.add_done_callback(_PENDING.discard)
    return task
