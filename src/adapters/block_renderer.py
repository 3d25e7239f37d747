"""Render server-side del bloque de eventos.

Por qué está en adapters:
- El HTML es un detalle de infraestructura (Jinja2 con autoescape).
- El Core solo conoce `EventRecord` y los view models de lista/calendario.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.config import AppSettings
from core.domain.models import BlockAttributes, EventCollection, EventRecord, ViewType
from core.interfaces.events_source import EventsSource
from core.services.event_fetcher import fetch_all_events, fetch_page
from core.services.event_renderer import to_calendar_view_model, to_list_view_model

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

PREV_TEXT = "« Previous"
NEXT_TEXT = "Next »"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


@dataclass(frozen=True)
class PageLink:
    """Un elemento de la lista de paginación."""

    label: str
    url: str | None = None
    current: bool = False
    dots: bool = False
    css_class: str = "page-numbers"


def page_url(base_url: str, page: int) -> str:
    """URL de la página `page`: la base para la 1, `?paged=N` para el resto."""

    url = httpx.URL(base_url or "/")
    if page <= 1:
        return str(url.copy_remove_param("paged"))
    return str(url.copy_set_param("paged", page))


def build_pagination(
    *,
    current: int,
    total: int,
    base_url: str,
    end_size: int = 1,
    mid_size: int = 2,
) -> list[PageLink]:
    """Links estilo `paginate_links` de WordPress (type=list).

    Muestra `end_size` páginas en cada extremo y `mid_size` alrededor de la
    actual; los huecos se colapsan en un único `…`.
    """

    if total < 2:
        return []
    current = max(1, min(current, total))

    links: list[PageLink] = []
    if current > 1:
        links.append(PageLink(PREV_TEXT, page_url(base_url, current - 1), css_class="prev page-numbers"))

    dots = False
    for n in range(1, total + 1):
        if n == current:
            links.append(PageLink(str(n), current=True, css_class="page-numbers current"))
            dots = True
        elif n <= end_size or (current - mid_size <= n <= current + mid_size) or n > total - end_size:
            links.append(PageLink(str(n), page_url(base_url, n)))
            dots = True
        elif dots:
            links.append(PageLink("…", dots=True, css_class="page-numbers dots"))
            dots = False

    if current < total:
        links.append(PageLink(NEXT_TEXT, page_url(base_url, current + 1), css_class="next page-numbers"))
    return links


def render_list_html(
    *,
    collection: EventCollection,
    use_feature_image: bool,
    pagination: bool,
    current_page: int,
    base_url: str,
) -> str:
    items = to_list_view_model(collection.data)
    links = (
        build_pagination(current=current_page, total=collection.total_pages, base_url=base_url)
        if pagination
        else []
    )
    template = _get_env().get_template("events_list.html")
    return template.render(items=items, use_feature_image=use_feature_image, pagination_links=links)


def render_calendar_html(*, events: list[EventRecord], block_id: str | None = None) -> str:
    block_id = block_id or uuid.uuid4().hex[:13]
    widget_events = [item.to_widget() for item in to_calendar_view_model(events)]
    template = _get_env().get_template("events_calendar.html")
    return template.render(block_id=block_id, events=widget_events)


async def render_block(
    attributes: BlockAttributes | Mapping[str, Any],
    *,
    source: EventsSource,
    settings: AppSettings | None = None,
    current_page: int = 1,
    base_url: str = "",
    block_id: str | None = None,
) -> str:
    """Punto de entrada del render: atributos guardados → HTML.

    Los errores de red/parseo se propagan; el host decide qué mostrar.
    """

    settings = settings or AppSettings()
    if not isinstance(attributes, BlockAttributes):
        attributes = BlockAttributes.model_validate(attributes)

    if attributes.view_type is ViewType.CALENDAR:
        filters = attributes.to_filters(per_page=settings.calendar_page_size)
        events = await fetch_all_events(source, filters)
        logger.info("Rendering calendar block with %d events", len(events))
        return render_calendar_html(events=events, block_id=block_id)

    page = max(1, current_page) if attributes.pagination else 1
    filters = attributes.to_filters(per_page=min(attributes.post_per_page, settings.max_per_page))
    envelope = await fetch_page(source, filters, page)
    collection = EventCollection(data=list(envelope.events), total_pages=envelope.total_pages)
    logger.info("Rendering list block page %d/%d", page, collection.total_pages)
    return render_list_html(
        collection=collection,
        use_feature_image=attributes.use_feature_image,
        pagination=attributes.pagination,
        current_page=page,
        base_url=base_url,
    )


def export_block_html(*, html: str, output_path: Path) -> Path:
    """Escribe el HTML renderizado en disco (UTF-8)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path
