"""Paginated event fetching.

Pages are always requested one at a time and in increasing order: whether
page N+1 exists is only known after page N's ``total_pages`` is read. Each
call owns its accumulator, so independent fetches may run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from core.domain.errors import FetchCancelled
from core.domain.models import EventCollection, EventRecord, FilterParameters, PageEnvelope
from core.interfaces.events_source import EventsSource
from core.services.query_builder import build_query

logger = logging.getLogger(__name__)

Filters = FilterParameters | Mapping[str, Any] | None


def _check_cancelled(cancel_event: asyncio.Event | None, page: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("Events fetch cancelled before page %d", page)
        raise FetchCancelled(page)


async def fetch_page(source: EventsSource, filters: Filters, page: int) -> PageEnvelope:
    """Fetch a single page, forcing ``page`` over any caller-supplied value."""

    query = build_query(filters, {"page": page})
    logger.debug("Fetching events page %d: %s", page, query)
    return await source.fetch_events_page(query, page=page)


async def fetch_all_events(
    source: EventsSource,
    filters: Filters,
    *,
    cancel_event: asyncio.Event | None = None,
) -> list[EventRecord]:
    """Follow ``total_pages`` from page 1 and concatenate every page's events.

    The stopping condition is re-read from the most recently fetched envelope.
    Any failure aborts the whole aggregation; no partial result is returned.
    """

    page = 1
    _check_cancelled(cancel_event, page)
    envelope = await fetch_page(source, filters, page)
    events = list(envelope.events)

    while page + 1 <= envelope.total_pages:
        _check_cancelled(cancel_event, page + 1)
        envelope = await fetch_page(source, filters, page + 1)
        events.extend(envelope.events)
        page += 1

    logger.info("Fetched %d events across %d page(s)", len(events), page)
    return events


async def fetch_events(
    source: EventsSource,
    filters: Filters,
    *,
    recursive: bool = False,
    cancel_event: asyncio.Event | None = None,
) -> EventCollection | list[EventRecord]:
    """Fetch page 1, or every page when ``recursive``.

    Non-recursive calls return the page plus the API's ``total_pages`` so the
    caller can paginate itself; recursive calls return the flattened events.
    """

    if recursive:
        return await fetch_all_events(source, filters, cancel_event=cancel_event)

    _check_cancelled(cancel_event, 1)
    envelope = await fetch_page(source, filters, 1)
    return EventCollection(data=list(envelope.events), total_pages=envelope.total_pages)
