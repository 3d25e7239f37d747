"""Construcción del query string del endpoint de eventos.

Orden de salida: las claves de los filtros en el orden del caller y luego
las de `overrides`. Una clave sobreescrita se mueve a la posición del
override. Los valores se codifican con percent-encoding (las comas se dejan
literales para que las listas de IDs sigan legibles).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from core.domain.models import FilterParameters


_SAFE_CHARS = ","


def is_empty(value: Any) -> bool:
    """`None`, string vacío o colección vacía."""

    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _as_mapping(params: FilterParameters | Mapping[str, Any] | None) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, FilterParameters):
        return params.to_params()
    return dict(params)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_format_value(v) for v in value)
    return str(value)


def merge_params(
    filters: FilterParameters | Mapping[str, Any] | None,
    overrides: FilterParameters | Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Quita vacíos de `filters` y aplica `overrides` al final."""

    merged = {key: value for key, value in _as_mapping(filters).items() if not is_empty(value)}
    for key, value in _as_mapping(overrides).items():
        if value is None:
            continue
        merged.pop(key, None)
        merged[key] = value
    return merged


def build_query(
    filters: FilterParameters | Mapping[str, Any] | None,
    overrides: FilterParameters | Mapping[str, Any] | None = None,
) -> str:
    """Devuelve `k=v&k2=v2` (posiblemente vacío). Nunca lanza."""

    merged = merge_params(filters, overrides)
    return "&".join(
        f"{quote(str(key), safe='')}={quote(_format_value(value), safe=_SAFE_CHARS)}"
        for key, value in merged.items()
    )
