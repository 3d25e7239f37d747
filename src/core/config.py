"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los endpoints de la API se pasan explícitamente (`EndpointConfig`) a los
  adaptadores en vez de leerse de globals.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.taxonomy import Taxonomy


DEFAULT_API_ROOT = "https://events.ubc.ca/wp-json/tribe/events/v1"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "events-block"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "events-block"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "events-block"
    return Path.home() / ".config" / "events-block"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# events-block user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class EndpointConfig(BaseModel):
    """Las cuatro URLs absolutas de la API, tratadas como configuración opaca."""

    model_config = ConfigDict(frozen=True)

    events_url: str
    categories_url: str
    organizers_url: str
    venues_url: str

    def for_taxonomy(self, taxonomy: Taxonomy) -> str:
        if taxonomy is Taxonomy.CATEGORIES:
            return self.categories_url
        if taxonomy is Taxonomy.ORGANIZERS:
            return self.organizers_url
        return self.venues_url


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Orden de carga: variables de entorno, `.env` del proyecto y luego el
    `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVENTS_BLOCK_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    events_url: str = Field(
        default=f"{DEFAULT_API_ROOT}/events",
        min_length=8,
        description="Endpoint de eventos.",
    )
    categories_url: str = Field(
        default=f"{DEFAULT_API_ROOT}/categories",
        min_length=8,
        description="Endpoint de categorías.",
    )
    organizers_url: str = Field(
        default=f"{DEFAULT_API_ROOT}/organizers",
        min_length=8,
        description="Endpoint de organizadores.",
    )
    venues_url: str = Field(
        default=f"{DEFAULT_API_ROOT}/venues",
        min_length=8,
        description="Endpoint de venues.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="events-block/1.0 (+https://events.ubc.ca)",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    calendar_page_size: int = Field(
        default=50,
        ge=1,
        le=50,
        description="per_page usado al cargar todos los eventos de la vista calendario.",
    )
    default_per_page: int = Field(
        default=10,
        ge=1,
        le=50,
        description="per_page por defecto de la vista lista.",
    )
    max_per_page: int = Field(
        default=50,
        ge=1,
        description="Máximo de eventos por página aceptado por el bloque.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def endpoints(self) -> EndpointConfig:
        return EndpointConfig(
            events_url=self.events_url,
            categories_url=self.categories_url,
            organizers_url=self.organizers_url,
            venues_url=self.venues_url,
        )
