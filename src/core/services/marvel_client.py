"""Fachada pública del cliente.

Compone firma, URIs, fetcher y decoder detrás de una API pequeña. La
construcción no hace I/O; el `httpx.AsyncClient` se crea (si no se inyecta)
pero no abre conexiones hasta la primera petición.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from adapters.decoder import decode_characters, decode_events
from adapters.http_client import HttpJsonFetcher, build_async_client
from adapters.signer import RequestSigner
from adapters.uri_builder import UriBuilder
from core.config import AppSettings
from core.domain.models import Character, Credentials, Event
from core.interfaces.fetcher import JsonFetcher
from core.services.correlation import CorrelationEngine


class MarvelClient:
    """Punto de entrada para consultar la API.

    Uso típico:

        async with MarvelClient.from_settings(AppSettings()) as client:
            event = await client.earliest_shared_event("Hulk", "Thor")
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        fetcher: JsonFetcher | None = None,
    ) -> None:
        settings = settings or AppSettings()

        self._owned_http: httpx.AsyncClient | None = None
        if fetcher is None:
            if http_client is None:
                http_client = build_async_client(settings)
                self._owned_http = http_client
            fetcher = HttpJsonFetcher(http_client)

        self._fetcher = fetcher
        self._uris = UriBuilder(RequestSigner(credentials), settings.api_base)
        self._engine = CorrelationEngine(uri_builder=self._uris, fetcher=self._fetcher)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "MarvelClient":
        return cls(settings.credentials(), settings=settings)

    async def search_characters(self, prefix: str) -> list[Character]:
        value = await self._fetcher.fetch(self._uris.character_by_name(prefix))
        return decode_characters(value)

    async def find_character(self, name: str) -> Character:
        return await self._engine.find_character(name)

    async def events_by_character(self, character_id: int) -> list[Event]:
        """Eventos del personaje (una página de tamaño máximo, por fecha)."""

        value = await self._fetcher.fetch(self._uris.character_events(character_id))
        return decode_events(value)

    async def earliest_shared_event(self, name1: str, name2: str) -> Event | None:
        return await self._engine.earliest_shared_event(name1, name2)

    async def aclose(self) -> None:
        if self._owned_http is not None:
            await self._owned_http.aclose()

    async def __aenter__(self) -> "MarvelClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
