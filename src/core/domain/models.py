"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta del JSON de la API sin escribir parsers a mano.
- `frozen=True` hace los modelos inmutables y hashables: los `Event` pueden
  vivir en un `set` y compararse por valor completo (id incluido).

Nota:
- Estos modelos describen *qué* devuelve el servicio, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


def _none_as_empty(value: Any) -> Any:
    # La API devuelve `null` en descripciones vacías.
    return "" if value is None else value


class Character(BaseModel):
    """Personaje tal como lo devuelve `GET characters`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Identificador estable asignado por el servicio.")
    name: str = Field(..., description="Nombre visible del personaje.")
    description: str = Field(
        ...,
        description="Texto libre; puede venir vacío (null se normaliza a \"\").",
    )

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: Any) -> Any:
        return _none_as_empty(value)


class Event(BaseModel):
    """Evento narrativo (crossover, saga...) en el que aparecen personajes.

    Dos eventos son iguales solo si coinciden los cuatro campos. Es la base de
    la intersección en `core.services.correlation`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Identificador del evento.")
    title: str = Field(..., description="Título del evento.")
    start: str | None = Field(
        default=None,
        description="Fecha de inicio ('YYYY-MM-DD hh:mm:ss'); None si no se conoce.",
    )
    description: str = Field(..., description="Descripción del evento (null se normaliza a \"\").")

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: Any) -> Any:
        return _none_as_empty(value)


class PaginationDetails(BaseModel):
    """Metadatos de paginación del envelope (se leen y se descartan)."""

    model_config = ConfigDict(extra="ignore")

    offset: int = 0
    limit: int = 0
    total: int = 0
    count: int = 0


class DataContainer(PaginationDetails, Generic[T]):
    """Contenido de `data`: paginación + lista de resultados."""

    results: list[T]


class DataWrapper(BaseModel, Generic[T]):
    """Envelope completo `{"data": {...}}`.

    `data` es opcional: algunas respuestas de error del servicio no lo traen.
    """

    model_config = ConfigDict(extra="ignore")

    data: DataContainer[T] | None = None


class Credentials(BaseModel):
    """Par de claves de la API.

    Solo la clave pública viaja en claro; la privada solo entra en el hash.
    `SecretStr` evita que aparezca en `repr`, logs o volcados JSON.
    """

    model_config = ConfigDict(frozen=True)

    public_key: str = Field(..., min_length=1)
    private_key: SecretStr
