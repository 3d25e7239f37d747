"""Unit tests for the paginated event fetcher."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from core.domain.errors import FetchCancelled, FetchFailed, NetworkError, ParseError
from core.domain.models import EventCollection, EventRecord, PageEnvelope
from core.services.event_fetcher import fetch_all_events, fetch_events, fetch_page

from tests.factories import events_payload, make_event


class _ShrinkingSource:
    """Source whose declared total_pages changes between responses."""

    def __init__(self, totals: list[int]) -> None:
        self.totals = totals
        self.queries: list[str] = []

    async def fetch_events_page(self, query: str, *, page: int) -> PageEnvelope:
        self.queries.append(query)
        return PageEnvelope.model_validate(
            events_payload([make_event(page)], total_pages=self.totals[page - 1])
        )

    async def fetch_terms_page(self, url, taxonomy, *, page=1):  # pragma: no cover
        raise AssertionError("not used")


class TestRecursiveFetch:
    async def test_follows_total_pages_in_order(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        pages = [[make_event(1), make_event(2)], [make_event(3)], [make_event(4), make_event(5)]]
        client = make_api_client(paged_events_handler(pages, requests))

        events = await fetch_events(client, {"per_page": 2, "status": "publish"}, recursive=True)

        assert len(requests) == 3
        assert [r.url.params["page"] for r in requests] == ["1", "2", "3"]
        assert [e.id for e in events] == [1, 2, 3, 4, 5]
        assert isinstance(events, list)

    async def test_stop_condition_uses_latest_envelope(self):
        source = _ShrinkingSource([5, 2, 9, 9, 9])

        events = await fetch_all_events(source, {"per_page": 1})

        assert [e.id for e in events] == [1, 2]
        assert source.queries == ["per_page=1&page=1", "per_page=1&page=2"]

    async def test_zero_total_pages_fetches_once(self):
        source = _ShrinkingSource([0])

        events = await fetch_all_events(source, {})

        assert len(source.queries) == 1
        assert [e.id for e in events] == [1]

    async def test_failure_mid_loop_aborts_without_partial_results(self, make_api_client):
        def handler(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            if page == 2:
                return httpx.Response(503, text="unavailable")
            return httpx.Response(200, json=events_payload([make_event(page)], total_pages=3))

        client = make_api_client(handler)

        with pytest.raises(NetworkError) as excinfo:
            await fetch_events(client, {}, recursive=True)

        assert excinfo.value.page == 2
        assert excinfo.value.status_code == 503
        assert isinstance(excinfo.value, FetchFailed)

    async def test_cancellation_is_checked_before_each_page(self):
        cancel = asyncio.Event()

        class _CancellingSource(_ShrinkingSource):
            async def fetch_events_page(self, query, *, page):
                envelope = await super().fetch_events_page(query, page=page)
                if page == 2:
                    cancel.set()
                return envelope

        source = _CancellingSource([4, 4, 4, 4])

        with pytest.raises(FetchCancelled) as excinfo:
            await fetch_all_events(source, {}, cancel_event=cancel)

        assert excinfo.value.page == 3
        assert len(source.queries) == 2


class TestSinglePageFetch:
    async def test_non_recursive_issues_one_request(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        pages = [[make_event(1)], [make_event(2)], [make_event(3)]]
        client = make_api_client(paged_events_handler(pages, requests))

        result = await fetch_events(client, {"per_page": 1})

        assert len(requests) == 1
        assert isinstance(result, EventCollection)
        assert result.total_pages == 3
        assert [e.id for e in result.data] == [1]

    async def test_page_one_is_forced(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        client = make_api_client(paged_events_handler([[make_event(1)], [make_event(2)]], requests))

        await fetch_events(client, {"per_page": 1, "page": 2})

        assert requests[0].url.params["page"] == "1"

    async def test_fetch_page_targets_requested_page(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        client = make_api_client(paged_events_handler([[make_event(1)], [make_event(2)]], requests))

        envelope = await fetch_page(client, {"categories": "", "status": "publish"}, 2)

        assert str(requests[0].url).endswith("/events?status=publish&page=2")
        assert isinstance(envelope.events[0], EventRecord)
        assert envelope.events[0].id == 2

    async def test_invalid_payload_raises_parse_error(self, make_api_client):
        client = make_api_client(lambda request: httpx.Response(200, json={"unexpected": True}))

        with pytest.raises(ParseError) as excinfo:
            await fetch_events(client, {})

        assert excinfo.value.page == 1

    async def test_cancelled_before_first_request(self):
        cancel = asyncio.Event()
        cancel.set()
        source = _ShrinkingSource([1])

        with pytest.raises(FetchCancelled):
            await fetch_events(source, {}, cancel_event=cancel)

        assert source.queries == []
