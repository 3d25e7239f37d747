"""API payload factories shared by the test modules."""

from __future__ import annotations

from typing import Any


def make_event(index: int, **overrides: Any) -> dict[str, Any]:
    event: dict[str, Any] = {
        "id": index,
        "title": f"Event {index}",
        "start_date": "2024-05-01 18:00:00",
        "end_date": "2024-05-01 20:30:00",
        "timezone": "America/Vancouver",
        "all_day": False,
        "url": f"https://events.example.test/event/event-{index}/",
        "slug": f"event-{index}",
        "image": False,
    }
    event.update(overrides)
    return event


def events_payload(events: list[dict[str, Any]], *, total_pages: int = 1) -> dict[str, Any]:
    return {"events": events, "total": len(events), "total_pages": total_pages}


def terms_payload(
    key: str,
    terms: list[dict[str, Any]],
    *,
    next_rest_url: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {key: terms, "total": len(terms)}
    if next_rest_url:
        payload["next_rest_url"] = next_rest_url
    return payload
