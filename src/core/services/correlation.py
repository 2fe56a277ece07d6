"""Correlación de eventos entre dos personajes.

Responde a "¿cuál es el primer evento en el que aparecen ambos?":

1. Por cada nombre: búsqueda exacta -> id -> eventos del personaje -> `set`.
2. Las dos cadenas corren en paralelo (`asyncio.gather`); si una falla, la otra
   se cancela y la operación falla con ese error (nunca hay resultado parcial).
3. Se intersectan los sets y se elige el evento con `start` mínimo.

No hay estado entre llamadas: los ids se resuelven de nuevo cada vez.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from adapters.decoder import decode_characters, decode_events
from adapters.uri_builder import UriBuilder
from core.domain.models import Character, Event
from core.errors import CharacterNotFound
from core.interfaces.fetcher import JsonFetcher
from core.logging import get_logger

_logger = get_logger(__name__)


def start_sort_key(event: Event) -> tuple[bool, str, int]:
    """Clave de orden por fecha de inicio.

    Un evento sin `start` queda antes que cualquier fecha conocida. Las fechas
    llegan como 'YYYY-MM-DD hh:mm:ss', así que el orden de strings es el
    cronológico. El id solo desempata.
    """

    return (event.start is not None, event.start or "", event.id)


def earliest_event(events: Iterable[Event]) -> Event | None:
    return min(events, key=start_sort_key, default=None)


class CorrelationEngine:
    def __init__(self, *, uri_builder: UriBuilder, fetcher: JsonFetcher) -> None:
        self._uris = uri_builder
        self._fetcher = fetcher

    async def find_character(self, name: str) -> Character:
        """Búsqueda por nombre exacto; con varios resultados se usa el primero."""

        value = await self._fetcher.fetch(self._uris.character_by_name_exact(name))
        characters = decode_characters(value)
        if not characters:
            raise CharacterNotFound(name)
        return characters[0]

    async def event_set(self, name: str) -> set[Event]:
        character = await self.find_character(name)
        _logger.debug("Resolved character", name=name, character_id=character.id)

        value = await self._fetcher.fetch(self._uris.character_events(character.id))
        events = set(decode_events(value))
        _logger.debug("Fetched events", name=name, count=len(events))
        return events

    async def earliest_shared_event(self, name1: str, name2: str) -> Event | None:
        tasks = [asyncio.ensure_future(self.event_set(name)) for name in (name1, name2)]
        try:
            events1, events2 = await asyncio.gather(*tasks)
        except BaseException:
            # La otra cadena no debe quedar huérfana si esta falla: se cancela y
            # se espera a que termine antes de propagar el error.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        shared = events1 & events2
        _logger.debug("Shared events", name1=name1, name2=name2, count=len(shared))
        return earliest_event(shared)
