"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Valida en el borde las respuestas de la API de eventos (el esquema remoto
  es fijo, pero no confiamos en él ciegamente).
- Los mismos modelos sirven al renderer HTML, a la CLI y al exportador JSON.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.taxonomy import Taxonomy


class ViewType(str, Enum):
    LIST = "list"
    CALENDAR = "calendar"


class FilterParameters(BaseModel):
    """Filtros de una consulta al endpoint de eventos.

    `categories`, `organizer` y `venue` aceptan un string con IDs separados
    por comas o una lista de IDs.
    """

    model_config = ConfigDict(extra="allow")

    per_page: int | None = Field(
        default=None,
        ge=1,
        description="Eventos por página.",
    )
    categories: str | list[int] | None = Field(
        default=None,
        description="IDs de categorías.",
    )
    organizer: str | list[int] | None = Field(
        default=None,
        description="IDs de organizadores.",
    )
    venue: str | list[int] | None = Field(
        default=None,
        description="IDs de venues.",
    )
    status: str | None = Field(
        default=None,
        description="Estado de publicación (p.ej. 'publish').",
    )
    page: int | None = Field(
        default=None,
        ge=1,
        description="Página 1-based.",
    )

    def to_params(self) -> dict[str, Any]:
        """Mapping en orden de declaración, sin valores `None`."""

        return {key: value for key, value in self.model_dump().items() if value is not None}


class Term(BaseModel):
    """Término de una taxonomía (categoría, organizador o venue)."""

    id: int = Field(..., description="Identificador único dentro de la taxonomía.")
    display_name: str = Field(..., description="Nombre visible; no es único.")
    slug: str | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any], taxonomy: Taxonomy) -> "Term":
        return cls(
            id=raw["id"],
            display_name=str(raw.get(taxonomy.name_field) or ""),
            slug=raw.get("slug"),
        )


class TermToken(BaseModel):
    """Token de un input tipo tags: `{id, value}`."""

    id: int | None = None
    value: str = ""


class ImageSize(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None


class EventImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    sizes: dict[str, ImageSize] = Field(default_factory=dict)

    @field_validator("sizes", mode="before")
    @classmethod
    def _sizes_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @property
    def preferred_url(self) -> str | None:
        large = self.sizes.get("large")
        if large and large.url:
            return large.url
        return self.url


class EventRecord(BaseModel):
    """Evento tal y como lo devuelve la API (solo lectura)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    title: str = ""
    start_date: str | None = None
    end_date: str | None = None
    timezone: str | None = None
    all_day: bool = False
    url: str = ""
    slug: str = ""
    image: EventImage | None = None

    @field_validator("image", mode="before")
    @classmethod
    def _image_false_is_none(cls, value: Any) -> Any:
        # La API devuelve `false` cuando el evento no tiene imagen.
        if value is False or value == []:
            return None
        return value


class PageEnvelope(BaseModel):
    """Una respuesta del endpoint de eventos."""

    model_config = ConfigDict(extra="ignore")

    events: list[EventRecord]
    total_pages: int = Field(default=1, ge=0)
    total: int | None = None
    next_rest_url: str | None = None


class TermPage(BaseModel):
    """Una respuesta de un endpoint de taxonomía."""

    terms: list[Term] = Field(default_factory=list)
    next_rest_url: str | None = None


class EventCollection(BaseModel):
    """Una página de eventos más el total de páginas reportado por la API."""

    data: list[EventRecord] = Field(default_factory=list)
    total_pages: int = 0


class ListItem(BaseModel):
    title: str
    url: str = ""
    slug: str = ""
    start_label: str | None = None
    end_label: str | None = None
    image_url: str | None = None

    @property
    def has_dates(self) -> bool:
        return self.start_label is not None and self.end_label is not None


class CalendarItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    start: str | None = None
    end: str | None = None
    all_day: bool = Field(default=False, alias="allDay")
    url: str = ""

    def to_widget(self) -> dict[str, Any]:
        """Dict listo para `FullCalendar` (claves camelCase)."""

        return self.model_dump(by_alias=True)


class BlockAttributes(BaseModel):
    """Atributos guardados del bloque de eventos."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    view_type: ViewType = Field(default=ViewType.LIST, alias="viewType")
    post_per_page: int = Field(default=10, ge=1, le=50, alias="postPerPage")
    selected_categories: list[int] = Field(default_factory=list, alias="selectedCategories")
    selected_organizers: list[int] = Field(default_factory=list, alias="selectedOrganizers")
    selected_venues: list[int] = Field(default_factory=list, alias="selectedVenues")
    pagination: bool = False
    use_feature_image: bool = Field(default=False, alias="useFeatureImage")

    def to_filters(self, *, per_page: int, page: int | None = None) -> FilterParameters:
        return FilterParameters(
            per_page=per_page,
            categories=",".join(str(i) for i in self.selected_categories),
            organizer=",".join(str(i) for i in self.selected_organizers),
            venue=",".join(str(i) for i in self.selected_venues),
            status="publish",
            page=page,
        )
