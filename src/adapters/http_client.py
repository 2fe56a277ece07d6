"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging de todas las peticiones a la API.
- Facilita testeo: se puede sustituir por un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import DecodeError, TransportError
from core.logging import get_logger

_logger = get_logger(__name__)

# Parámetros de autenticación que no deben acabar en los logs.
_REDACTED_PARAMS = ("ts", "hash", "apikey")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite inyectar un transporte falso en tests.
    """

    settings = settings or AppSettings()
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


def redact_uri(uri: httpx.URL) -> str:
    """Representación de `uri` apta para logs (sin firma ni clave pública)."""

    params = [(k, v) for k, v in uri.params.multi_items() if k not in _REDACTED_PARAMS]
    return str(uri.copy_with(params=params or None))


class HttpJsonFetcher:
    """Implementación de `JsonFetcher` sobre un `httpx.AsyncClient` compartido.

    El cliente es seguro para uso concurrente, así que varios `fetch` pueden
    estar en vuelo a la vez.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, uri: httpx.URL) -> Any:
        safe_uri = redact_uri(uri)
        _logger.debug("GET", uri=safe_uri)

        try:
            response = await self._client.get(uri)
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {safe_uri} failed: {exc}") from exc

        if response.is_success:
            _logger.debug("Response", uri=safe_uri, status=response.status_code)
        else:
            _logger.warning("Non-success response", uri=safe_uri, status=response.status_code)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(
                f"Response from {safe_uri} (HTTP {response.status_code}) is not valid JSON"
            ) from exc
