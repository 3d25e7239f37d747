"""Exportación JSON de eventos.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite inspeccionar lo que devolvió la API sin pasar por el render HTML.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel


def export_events_json(*, events: Iterable[BaseModel], output_path: Path) -> Path:
    """Exporta eventos (o view models) a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [event.model_dump(mode="json", by_alias=True) for event in events]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
