"""Contrato del fetcher JSON.

Por qué Protocol:
- El motor de correlación y la fachada dependen solo de `fetch`, no de httpx.
- En tests se sustituye por un stub que registra el orden de las llamadas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx


@runtime_checkable
class JsonFetcher(Protocol):
    """Contrato mínimo para obtener un documento JSON.

    Reglas de diseño:
    - `fetch` es asíncrono y hace exactamente un round trip de red.
    - Los fallos se traducen a `TransportError` / `DecodeError`.
    - Un status no-2xx no es fatal: se parsea el cuerpo igualmente.
    """

    async def fetch(self, uri: httpx.URL) -> Any:
        """Hace GET sobre `uri` y devuelve el cuerpo parseado como JSON."""

        ...
