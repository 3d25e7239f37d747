"""Shared fixtures: endpoint config and httpx mock transports."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from adapters.events_api import EventsApiClient
from core.config import EndpointConfig
from tests.factories import events_payload

API_ROOT = "https://events.example.test/wp-json/tribe/events/v1"


@pytest.fixture
def endpoints() -> EndpointConfig:
    return EndpointConfig(
        events_url=f"{API_ROOT}/events",
        categories_url=f"{API_ROOT}/categories",
        organizers_url=f"{API_ROOT}/organizers",
        venues_url=f"{API_ROOT}/venues",
    )


@pytest.fixture
def make_api_client(endpoints: EndpointConfig):
    """Build an `EventsApiClient` whose HTTP calls go to `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> EventsApiClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return EventsApiClient(endpoints, client=client)

    return _make


@pytest.fixture
def paged_events_handler():
    """Handler serving `pages` (list of event lists) by the `page` query param."""

    def _make(pages: list[list[dict[str, Any]]], requests: list[httpx.Request]):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            page = int(request.url.params.get("page", "1"))
            if page < 1 or page > len(pages):
                return httpx.Response(404, json={"code": "rest_no_route"})
            return httpx.Response(200, json=events_payload(pages[page - 1], total_pages=len(pages)))

        return handler

    return _make
