"""Taxonomía de errores del cliente.

Por qué una jerarquía propia:
- La CLI solo necesita capturar `MarvelError` para presentar cualquier fallo.
- Cada capa traduce sus excepciones de librería (httpx, pydantic, json) a una
  de estas clases, encadenando la original con `raise ... from exc`.
"""

from __future__ import annotations


class MarvelError(Exception):
    """Base de todos los errores del cliente."""


class TransportError(MarvelError):
    """Fallo de red/TLS/DNS (o timeout) al contactar el servicio."""


class InvalidUri(MarvelError):
    """No se pudo construir una URI válida; no se llegó a hacer la petición."""


class DecodeError(MarvelError):
    """El cuerpo no es JSON válido o el envelope no tiene la forma esperada."""


class CharacterNotFound(MarvelError):
    """La búsqueda exacta por nombre no devolvió resultados."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Character `{name}` Not Found")
        self.name = name


class ConfigurationError(MarvelError):
    """Faltan credenciales u otra configuración obligatoria."""
