"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para todas las queries.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con
  `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import ConversationsSettings
from core.domain.errors import DecodeError, TransportError
from core.interfaces.transport import RequestDescriptor

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ConversationsSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las queries se comporten igual.
    - Facilita testeo y futuras políticas (proxies).
    """

    settings = settings or ConversationsSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Transporte por defecto: GET con httpx y JSON como payload.

    - Errores de red/timeout de httpx -> `TransportError`.
    - Status >= 400 -> `TransportError(status_code=...)`.
    - Cuerpo que no es JSON -> `DecodeError`.

    Si no se inyecta `client`, se abre uno por request.
    """

    def __init__(
        self,
        settings: ConversationsSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or ConversationsSettings()
        self._client = client

    async def send(self, request: RequestDescriptor) -> dict[str, Any]:
        if self._client is not None:
            response = await self._get(self._client, request)
        else:
            async with build_async_client(self._settings) as client:
                response = await self._get(client, request)

        if response.status_code >= 400:
            raise TransportError(
                f"HTTP {response.status_code} from {request.url}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {request.url} is not JSON") from exc
        if not isinstance(data, dict):
            raise DecodeError(f"Response from {request.url} is not a JSON object")
        return data

    async def _get(self, client: httpx.AsyncClient, request: RequestDescriptor) -> httpx.Response:
        try:
            return await client.get(request.url, params=list(request.params), headers=request.headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
