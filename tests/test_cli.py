"""CLI tests with the API client swapped for a mock transport."""

from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.events_api import EventsApiClient
from cli import main as cli_main

from tests.factories import events_payload, make_event, terms_payload

runner = CliRunner()


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/events"):
        page = int(request.url.params.get("page", "1"))
        if page == 99:
            return httpx.Response(500)
        return httpx.Response(200, json=events_payload([make_event(page)], total_pages=2))
    if path.endswith("/categories"):
        return httpx.Response(
            200,
            json=terms_payload("categories", [{"id": 1, "name": "Music"}, {"id": 2, "name": "Art"}]),
        )
    return httpx.Response(404)


@pytest.fixture(autouse=True)
def _mock_api(monkeypatch, endpoints):
    def _open(settings):
        client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
        return EventsApiClient(endpoints, client=client)

    monkeypatch.setattr(cli_main, "open_api_client", _open)


def test_events_json_export(tmp_path):
    out = tmp_path / "events.json"

    result = runner.invoke(cli_main.app, ["events", "--all", "--json-out", str(out)])

    assert result.exit_code == 0, result.output
    exported = json.loads(out.read_text(encoding="utf-8"))
    assert [e["id"] for e in exported] == [1, 2]


def test_events_failure_exits_non_zero():
    result = runner.invoke(cli_main.app, ["events", "--page", "99"])

    assert result.exit_code == 1
    assert "HTTP 500" in result.output


def test_resolve_prints_ids():
    result = runner.invoke(cli_main.app, ["resolve", "categories", "music", "ART", "Dance", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output.strip()) == [1, 2]


def test_render_list_html(tmp_path):
    out = tmp_path / "block.html"

    result = runner.invoke(
        cli_main.app,
        ["render", "--view", "list", "--category", "music", "--pagination", "--output", str(out)],
    )

    assert result.exit_code == 0, result.output
    html = out.read_text(encoding="utf-8")
    assert "ubc-events__list" in html
    assert "Event 1" in html
