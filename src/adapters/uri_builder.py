"""Construcción de URIs autenticadas.

Cada URI lleva siempre `ts`, `hash` y `apikey`, calculados en el momento:
el servicio rechaza timestamps reutilizados, así que dos llamadas concurrentes
nunca comparten firma.
"""

from __future__ import annotations

from typing import Callable, Mapping

import httpx

from adapters.signer import RequestSigner, current_timestamp
from core.config import DEFAULT_API_BASE
from core.errors import InvalidUri

# Máximo `limit` que acepta el servicio. Con ~75 eventos en total, una sola
# página basta para traer todos los eventos de un personaje.
MAX_LIMIT = 100

QueryValue = str | int


def _check_path(path: str) -> None:
    if not path:
        raise InvalidUri("Empty endpoint path")
    if path.startswith("/") or "://" in path:
        raise InvalidUri(f"Endpoint path must be relative to the API base: {path!r}")
    for ch in path:
        if ch.isspace() or not ch.isprintable() or ch in "?#":
            raise InvalidUri(f"Malformed path segment in {path!r}")


class UriBuilder:
    """Compone URIs de la API a partir de una ruta y parámetros propios."""

    def __init__(
        self,
        signer: RequestSigner,
        api_base: str = DEFAULT_API_BASE,
        *,
        clock: Callable[[], str] = current_timestamp,
    ) -> None:
        # Sin barra final, `join` sustituiría el último segmento de la base.
        self._api_base = api_base if api_base.endswith("/") else api_base + "/"
        self._signer = signer
        self._clock = clock

    def build(self, path: str, params: Mapping[str, QueryValue] | None = None) -> httpx.URL:
        _check_path(path)

        ts = self._clock()
        query: list[tuple[str, str]] = [
            ("ts", ts),
            ("hash", self._signer.sign(ts)),
            ("apikey", self._signer.public_key),
        ]
        for key, value in (params or {}).items():
            query.append((key, str(value)))

        try:
            url = httpx.URL(self._api_base).join(path)
            url = url.copy_with(params=httpx.QueryParams(query))
            # Fuerza la serialización completa (encoding UTF-8 incluido).
            return httpx.URL(str(url))
        except (httpx.InvalidURL, ValueError) as exc:
            raise InvalidUri(f"Cannot build URI for {path!r}: {exc}") from exc

    def character_by_name_exact(self, name: str) -> httpx.URL:
        """Búsqueda de personaje por nombre exacto."""

        return self.build("characters", {"name": name})

    def character_by_name(self, name_starts_with: str) -> httpx.URL:
        """Búsqueda de personajes cuyo nombre empieza por `name_starts_with`."""

        return self.build("characters", {"nameStartsWith": name_starts_with})

    def character_events(self, character_id: int, limit: int = MAX_LIMIT) -> httpx.URL:
        """Eventos de un personaje, una sola página ordenada por fecha de inicio."""

        limit = max(1, min(int(limit), MAX_LIMIT))
        return self.build(
            f"characters/{int(character_id)}/events",
            {"limit": limit, "orderBy": "startDate"},
        )
