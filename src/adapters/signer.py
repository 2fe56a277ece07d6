"""Firma de peticiones a la API de Marvel.

El esquema de autorización pide enviar `ts` en claro junto con
`md5(ts + private_key + public_key)`, de modo que el servidor pueda verificar
el secreto compartido sin que viaje por la red.
"""

from __future__ import annotations

import hashlib
import time

from core.domain.models import Credentials


def current_timestamp() -> str:
    """Milisegundos desde epoch como string decimal."""

    return str(time.time_ns() // 1_000_000)


class RequestSigner:
    """Calcula el hash de autorización.

    Cada llamada crea y descarta su propio objeto md5, así que firmas
    concurrentes no comparten estado.
    """

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @property
    def public_key(self) -> str:
        return self._credentials.public_key

    def sign(self, timestamp: str) -> str:
        raw = timestamp + self._credentials.private_key.get_secret_value() + self._credentials.public_key
        # MD5 lo impone el servicio, no es una elección de seguridad.
        return hashlib.md5(raw.encode("utf-8")).hexdigest()  # nosec
