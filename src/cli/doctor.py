"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import DEFAULT_API_ROOT, AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url, params={"per_page": 1})
        return response.is_success, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


async def _check_endpoints(settings: AppSettings) -> list[tuple[str, str, bool, str]]:
    endpoints = settings.endpoints()
    named = [
        ("Events", endpoints.events_url),
        ("Categories", endpoints.categories_url),
        ("Organizers", endpoints.organizers_url),
        ("Venues", endpoints.venues_url),
    ]
    results = await asyncio.gather(*(_check_http(url, settings) for _, url in named))
    return [(name, url, ok, detail) for (name, url), (ok, detail) in zip(named, results)]


@app.command()
def run() -> None:
    """Check that every configured endpoint answers."""

    settings = AppSettings()

    table = Table(title="events-block Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User-Agent", "OK", settings.user_agent)

    failures = 0
    for name, url, ok, detail in asyncio.run(_check_endpoints(settings)):
        table.add_row(f"{name} endpoint", "OK" if ok else "FAIL", f"{url} -> {detail}")
        failures += 0 if ok else 1

    _console.print(table)

    if failures:
        _console.print(
            "\n[yellow]Note:[/yellow] run `events-block doctor setup-endpoints` to point at another API root."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-endpoints")
def setup_endpoints() -> None:
    """Interactive endpoint setup (stores config in the user config .env)."""

    root = typer.prompt("Events API root", default=DEFAULT_API_ROOT, show_default=True).strip().rstrip("/")
    if not root.startswith(("http://", "https://")):
        raise typer.BadParameter("API root must be an absolute http(s) URL")

    env_path = write_user_env_vars(
        {
            "EVENTS_BLOCK_EVENTS_URL": f"{root}/events",
            "EVENTS_BLOCK_CATEGORIES_URL": f"{root}/categories",
            "EVENTS_BLOCK_ORGANIZERS_URL": f"{root}/organizers",
            "EVENTS_BLOCK_VENUES_URL": f"{root}/venues",
        }
    )

    _console.print(f"[green]Saved endpoint config to:[/green] {env_path}")
