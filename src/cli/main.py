"""CLI principal (Typer).

Comandos:
- `events`: consulta el endpoint de eventos (una página o todas).
- `terms`: lista los términos de una taxonomía.
- `resolve`: traduce tokens de texto a IDs de términos.
- `render`: genera el HTML del bloque (lista o calendario).
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from adapters.block_renderer import export_block_html, render_block
from adapters.events_api import EventsApiClient
from adapters.json_exporter import export_events_json
from cli import doctor
from cli.ui_components import build_events_table, build_terms_table, build_tokens_table, print_banner
from core.config import AppSettings
from core.domain.errors import EventsBlockError
from core.domain.models import BlockAttributes, EventCollection, FilterParameters, ViewType
from core.domain.taxonomy import Taxonomy
from core.logging_config import configure_logging
from core.services.event_fetcher import fetch_all_events, fetch_page
from core.services.event_renderer import to_list_view_model
from core.services.term_loader import TermCatalog
from core.services.term_resolver import resolve_term_ids, term_ids_to_tokens

app = typer.Typer(no_args_is_help=True, help="Fetch and render events from the events REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def open_api_client(settings: AppSettings) -> EventsApiClient:
    return EventsApiClient(settings.endpoints(), settings=settings)


def _join_ids(ids: list[int] | None) -> str:
    return ",".join(str(i) for i in ids or [])


def _fail(exc: EventsBlockError) -> typer.Exit:
    _console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Show the banner."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)


@app.command()
def events(
    per_page: int = typer.Option(10, "--per-page", min=1, max=50, help="Events per page."),
    category: list[int] | None = typer.Option(None, "--category", "-c", help="Category ID (repeatable)."),
    organizer: list[int] | None = typer.Option(None, "--organizer", "-o", help="Organizer ID (repeatable)."),
    venue: list[int] | None = typer.Option(None, "--venue", help="Venue ID (repeatable)."),
    status: str = typer.Option("publish", "--status", help="Publication status."),
    page: int = typer.Option(1, "--page", min=1, help="Page to fetch (ignored with --all)."),
    fetch_all: bool = typer.Option(False, "--all", help="Follow total_pages and fetch every page."),
    json_out: Path | None = typer.Option(None, "--json-out", help="Write raw events to a JSON file."),
) -> None:
    """Fetch events and print them as a table."""

    settings = AppSettings()
    filters = FilterParameters(
        per_page=per_page,
        categories=_join_ids(category),
        organizer=_join_ids(organizer),
        venue=_join_ids(venue),
        status=status,
    )

    async def _run() -> EventCollection:
        async with open_api_client(settings) as client:
            if fetch_all:
                data = await fetch_all_events(client, filters)
                return EventCollection(data=data, total_pages=1 if data else 0)
            envelope = await fetch_page(client, filters, page)
            return EventCollection(data=list(envelope.events), total_pages=envelope.total_pages)

    try:
        collection = asyncio.run(_run())
    except EventsBlockError as exc:
        raise _fail(exc) from exc

    if json_out is not None:
        path = export_events_json(events=collection.data, output_path=json_out)
        _console.print(f"[green]Saved {len(collection.data)} events to:[/green] {path}")
        return

    table = build_events_table(
        to_list_view_model(collection.data),
        page=None if fetch_all else page,
        total_pages=None if fetch_all else collection.total_pages,
    )
    _console.print(table)


@app.command()
def terms(taxonomy: Taxonomy = typer.Argument(..., help="categories, organizers or venues.")) -> None:
    """List every term of a taxonomy (follows next_rest_url)."""

    settings = AppSettings()

    async def _run():
        async with open_api_client(settings) as client:
            return await TermCatalog(client, settings.endpoints()).get(taxonomy)

    try:
        loaded = asyncio.run(_run())
    except EventsBlockError as exc:
        raise _fail(exc) from exc

    _console.print(build_terms_table(taxonomy, loaded))


@app.command()
def resolve(
    taxonomy: Taxonomy = typer.Argument(..., help="categories, organizers or venues."),
    tokens: list[str] = typer.Argument(..., help="Term names as typed in a tag input."),
    as_json: bool = typer.Option(False, "--json", help="Print the resolved IDs as JSON."),
) -> None:
    """Resolve free-text tokens to term IDs (case-insensitive fallback)."""

    settings = AppSettings()

    async def _run():
        async with open_api_client(settings) as client:
            return await TermCatalog(client, settings.endpoints()).get(taxonomy)

    try:
        loaded = asyncio.run(_run())
    except EventsBlockError as exc:
        raise _fail(exc) from exc

    ids = resolve_term_ids(loaded, tokens)
    if as_json:
        typer.echo(json.dumps(ids))
        return
    _console.print(build_tokens_table(term_ids_to_tokens(loaded, ids)))


@app.command()
def render(
    view: ViewType = typer.Option(ViewType.LIST, "--view", help="list or calendar."),
    per_page: int = typer.Option(10, "--per-page", min=1, max=50),
    category: list[str] | None = typer.Option(None, "--category", "-c", help="Category name or ID."),
    organizer: list[str] | None = typer.Option(None, "--organizer", "-o", help="Organizer name or ID."),
    venue: list[str] | None = typer.Option(None, "--venue", help="Venue name or ID."),
    pagination: bool = typer.Option(False, "--pagination/--no-pagination"),
    feature_image: bool = typer.Option(False, "--feature-image/--no-feature-image"),
    page: int = typer.Option(1, "--page", min=1),
    base_url: str = typer.Option("/", "--base-url", help="Base URL for pagination links."),
    output: Path | None = typer.Option(None, "--output", help="Write the HTML to this file."),
) -> None:
    """Render the events block HTML from block attributes."""

    settings = AppSettings()
    endpoints = settings.endpoints()
    selections = {
        Taxonomy.CATEGORIES: category or [],
        Taxonomy.ORGANIZERS: organizer or [],
        Taxonomy.VENUES: venue or [],
    }

    async def _run() -> str:
        async with open_api_client(settings) as client:
            catalog = TermCatalog(client, endpoints)
            selected: dict[Taxonomy, list[int]] = {}
            for taxonomy, raw_tokens in selections.items():
                tokens = [{"id": int(t), "value": t} if t.isdigit() else t for t in raw_tokens]
                selected[taxonomy] = resolve_term_ids(await catalog.get(taxonomy), tokens) if tokens else []

            attributes = BlockAttributes(
                view_type=view,
                post_per_page=per_page,
                selected_categories=selected[Taxonomy.CATEGORIES],
                selected_organizers=selected[Taxonomy.ORGANIZERS],
                selected_venues=selected[Taxonomy.VENUES],
                pagination=pagination,
                use_feature_image=feature_image,
            )
            return await render_block(
                attributes,
                source=client,
                settings=settings,
                current_page=page,
                base_url=base_url,
            )

    try:
        html = asyncio.run(_run())
    except EventsBlockError as exc:
        raise _fail(exc) from exc

    if output is None:
        typer.echo(html)
        return
    path = export_block_html(html=html, output_path=output)
    _console.print(f"[green]Saved block HTML to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
