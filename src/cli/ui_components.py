"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ListItem, Term, TermToken
from core.domain.taxonomy import Taxonomy


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("events-block", style="bold cyan")
    subtitle = Text("Events API • List • Calendar", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_events_table(items: Iterable[ListItem], *, page: int | None = None, total_pages: int | None = None) -> Table:
    title = "Events"
    if page is not None and total_pages is not None:
        title = f"Events (page {page}/{total_pages})"

    table = Table(title=title)
    table.add_column("Title", style="cyan")
    table.add_column("Start", style="white", no_wrap=True)
    table.add_column("End", style="white", no_wrap=True)
    table.add_column("URL", style="magenta")
    for item in items:
        table.add_row(item.title, item.start_label or "-", item.end_label or "-", item.url)
    return table


def build_terms_table(taxonomy: Taxonomy, terms: Iterable[Term]) -> Table:
    table = Table(title=taxonomy.label())
    table.add_column("ID", style="bright_green", no_wrap=True, justify="right")
    table.add_column("Name", style="white")
    table.add_column("Slug", style="dim")
    for term in terms:
        table.add_row(str(term.id), term.display_name, term.slug or "")
    return table


def build_tokens_table(tokens: Iterable[TermToken]) -> Table:
    table = Table(title="Resolved terms")
    table.add_column("ID", style="bright_green", justify="right")
    table.add_column("Value", style="white")
    for token in tokens:
        table.add_row(str(token.id), token.value)
    return table
