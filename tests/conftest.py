import asyncio
from typing import Any

import httpx
import pytest
import structlog

from core.config import AppSettings
from core.domain.models import Credentials
from core.logging import configure_logging

PUBLIC_KEY = "public-test-key"
PRIVATE_KEY = "private-test-key"


def envelope(results: list[dict[str, Any]], **page: int) -> dict[str, Any]:
    data: dict[str, Any] = {
        "offset": page.get("offset", 0),
        "limit": page.get("limit", 20),
        "total": page.get("total", len(results)),
        "count": page.get("count", len(results)),
        "results": results,
    }
    return {"code": 200, "status": "Ok", "data": data}


def character(id: int, name: str, description: str | None = "") -> dict[str, Any]:
    return {"id": id, "name": name, "description": description, "modified": "2014-04-29T14:18:17-0400"}


def event(id: int, title: str, start: str | None = None, description: str = "") -> dict[str, Any]:
    return {"id": id, "title": title, "start": start, "end": None, "description": description}


class StubFetcher:
    """In-memory `JsonFetcher` that answers from canned character/event data.

    `calls` records "start:<label>" / "end:<label>" entries so tests can check
    the ordering of concurrent requests.
    """

    def __init__(
        self,
        characters: dict[str, list[dict[str, Any]]],
        events: dict[int, list[dict[str, Any]]],
        *,
        hold_lookups: int = 0,
    ) -> None:
        self.characters = characters
        self.events = events
        self.calls: list[str] = []
        self._hold_lookups = hold_lookups
        self._lookups_started = 0
        self._released = asyncio.Event()

    async def fetch(self, uri: httpx.URL) -> Any:
        segments = uri.path.rstrip("/").split("/")
        if segments[-1] == "characters":
            name = uri.params["name"]
            label = f"character:{name}"
            self.calls.append(f"start:{label}")
            if self._hold_lookups:
                # Only answers once every held lookup is in flight.
                self._lookups_started += 1
                if self._lookups_started >= self._hold_lookups:
                    self._released.set()
                await self._released.wait()
            else:
                await asyncio.sleep(0)
            payload = envelope(self.characters.get(name, []))
        else:
            character_id = int(segments[-2])
            label = f"events:{character_id}"
            self.calls.append(f"start:{label}")
            await asyncio.sleep(0)
            payload = envelope(self.events.get(character_id, []))
        self.calls.append(f"end:{label}")
        return payload


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(public_key=PUBLIC_KEY, private_key=PRIVATE_KEY)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, key=PUBLIC_KEY, secret_key=PRIVATE_KEY)


@pytest.fixture(autouse=True)
def default_logging():
    # The CLI callback reconfigures structlog; every test starts from the library default.
    configure_logging()
    yield
    structlog.reset_defaults()
    configure_logging()
