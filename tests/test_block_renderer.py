"""Tests for the server-side block render entry point."""

from __future__ import annotations

import json
import re

import httpx
from bs4 import BeautifulSoup

from adapters.block_renderer import build_pagination, page_url, render_block
from core.config import AppSettings
from core.domain.models import BlockAttributes

from tests.factories import make_event


def _settings() -> AppSettings:
    return AppSettings(_env_file=None)


class TestListRender:
    async def test_renders_items_and_requests_first_page(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        pages = [[make_event(1, title="Talk &amp; Tea"), make_event(2, start_date=None)]]
        client = make_api_client(paged_events_handler(pages, requests))
        attributes = {
            "viewType": "list",
            "postPerPage": 2,
            "selectedCategories": [4, 8],
            "selectedOrganizers": [],
            "selectedVenues": [],
            "pagination": False,
        }

        html = await render_block(attributes, source=client, settings=_settings(), current_page=3)

        params = requests[0].url.params
        assert params["page"] == "1"
        assert params["per_page"] == "2"
        assert params["categories"] == "4,8"
        assert params["status"] == "publish"
        assert "organizer" not in params

        soup = BeautifulSoup(html, "html.parser")
        titles = [h3.get_text() for h3 in soup.select(".ubc-events__list h3")]
        assert titles == ["Talk & Tea", "Event 2"]
        dates = soup.select(".ubc-events__list__date")
        assert len(dates) == 1
        assert "May 01, 2024 06:00 PM - May 01, 2024 08:30 PM" in dates[0].get_text()
        assert soup.select("ul.page-numbers") == []

    async def test_pagination_uses_current_page(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        pages = [[make_event(i)] for i in range(1, 6)]
        client = make_api_client(paged_events_handler(pages, requests))
        attributes = BlockAttributes(post_per_page=1, pagination=True)

        html = await render_block(
            attributes,
            source=client,
            settings=_settings(),
            current_page=3,
            base_url="https://site.example.test/events/",
        )

        assert requests[0].url.params["page"] == "3"
        soup = BeautifulSoup(html, "html.parser")
        current = soup.select_one("ul.page-numbers span.current")
        assert current.get_text() == "3"
        hrefs = [a["href"] for a in soup.select("ul.page-numbers a")]
        assert "https://site.example.test/events/" in hrefs
        assert "https://site.example.test/events/?paged=5" in hrefs

    async def test_feature_image_only_when_enabled(self, make_api_client, paged_events_handler):
        image = {"url": "https://cdn.example.test/a.jpg", "sizes": {}}
        pages = [[make_event(1, image=image)]]

        disabled = await render_block(
            BlockAttributes(use_feature_image=False),
            source=make_api_client(paged_events_handler(pages, [])),
            settings=_settings(),
        )
        enabled = await render_block(
            BlockAttributes(use_feature_image=True),
            source=make_api_client(paged_events_handler(pages, [])),
            settings=_settings(),
        )

        assert BeautifulSoup(disabled, "html.parser").select("img") == []
        [img] = BeautifulSoup(enabled, "html.parser").select("img")
        assert img["src"] == "https://cdn.example.test/a.jpg"
        assert img["alt"] == "Event 1"

    async def test_titles_are_escaped(self, make_api_client, paged_events_handler):
        pages = [[make_event(1, title="&lt;script&gt;alert(1)&lt;/script&gt;")]]

        html = await render_block(
            BlockAttributes(),
            source=make_api_client(paged_events_handler(pages, [])),
            settings=_settings(),
        )

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestCalendarRender:
    async def test_fetches_every_page_and_embeds_events(self, make_api_client, paged_events_handler):
        requests: list[httpx.Request] = []
        pages = [[make_event(1)], [make_event(2, all_day=True)], [make_event(3)]]
        client = make_api_client(paged_events_handler(pages, requests))

        html = await render_block(
            {"viewType": "calendar", "postPerPage": 5, "selectedVenues": [7]},
            source=client,
            settings=_settings(),
            block_id="abc123",
        )

        assert [r.url.params["page"] for r in requests] == ["1", "2", "3"]
        assert all(r.url.params["per_page"] == "50" for r in requests)
        assert requests[0].url.params["venue"] == "7"

        soup = BeautifulSoup(html, "html.parser")
        assert soup.select_one("div#ubc-events-block-abc123") is not None
        script = soup.find("script").string
        match = re.search(r"events: (\[.*\]),\n", script)
        widget_events = json.loads(match.group(1))
        assert [e["title"] for e in widget_events] == ["Event 1", "Event 2", "Event 3"]
        assert widget_events[1]["allDay"] is True
        assert widget_events[0]["start"] == "2024-05-01 18:00:00"


class TestPagination:
    def test_single_page_has_no_links(self):
        assert build_pagination(current=1, total=1, base_url="/") == []

    def test_window_and_dots(self):
        links = build_pagination(current=5, total=10, base_url="/events/")

        labels = [link.label for link in links]
        assert labels == ["« Previous", "1", "…", "3", "4", "5", "6", "7", "…", "10", "Next »"]
        assert [link.label for link in links if link.current] == ["5"]

    def test_first_page_has_no_previous(self):
        labels = [link.label for link in build_pagination(current=1, total=3, base_url="/")]

        assert labels == ["1", "2", "3", "Next »"]

    def test_page_url(self):
        assert page_url("https://site.example.test/events/?paged=4", 1) == "https://site.example.test/events/"
        assert page_url("https://site.example.test/events/", 2) == "https://site.example.test/events/?paged=2"
