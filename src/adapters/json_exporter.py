"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, notebooks).
- Permite guardar una consulta sin depender del render de tablas.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel


def export_json(*, payload: BaseModel | Sequence[BaseModel] | None, output_path: Path) -> Path:
    """Exporta uno o varios modelos a JSON UTF-8 con formato estable.

    `None` se escribe como `null` (p.ej. "sin evento compartido").
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if payload is None:
        data: object = None
    elif isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json")
    else:
        data = [item.model_dump(mode="json") for item in payload]
    output_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
