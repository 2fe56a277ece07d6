"""Decodificación del envelope de la API a modelos tipados.

Todas las respuestas llegan como `{"data": {"results": [...], ...paginación}}`.
Aquí solo nos quedamos con `results`; la paginación se valida y se descarta.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.domain.models import Character, DataWrapper, Event
from core.errors import DecodeError

M = TypeVar("M", bound=BaseModel)


def decode(value: Any, model: type[M]) -> list[M]:
    """Extrae la lista de resultados de `value` como instancias de `model`.

    - Si `data` falta (o es null) se devuelve una lista vacía: el servicio
      responde así en algunos errores y preferimos degradar sin romper.
    - Si falta `results` o un resultado no tiene los campos obligatorios,
      se lanza `DecodeError`.
    """

    if not isinstance(value, dict):
        raise DecodeError(f"Expected a JSON object envelope, got {type(value).__name__}")

    try:
        wrapper = DataWrapper[model].model_validate(value)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {model.__name__} envelope: {exc}") from exc

    if wrapper.data is None:
        return []
    return list(wrapper.data.results)


def decode_characters(value: Any) -> list[Character]:
    return decode(value, Character)


def decode_events(value: Any) -> list[Event]:
    return decode(value, Event)
