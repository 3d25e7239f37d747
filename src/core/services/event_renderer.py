"""Projection of API events into list and calendar view models.

Pure functions: no network, no mutation of the input records.
"""

from __future__ import annotations

import html
from collections.abc import Iterable
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.domain.models import CalendarItem, EventRecord, ListItem, ViewType

# Month names are fixed English; strftime's %B and %p follow the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _zone(name: str | None) -> ZoneInfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def parse_event_datetime(value: str | None, timezone: str | None = None) -> datetime | None:
    """Parse an API timestamp in the event's timezone.

    Naive values are already local to the event; aware values are converted.
    Returns ``None`` for missing or malformed input.
    """

    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None

    zone = _zone(timezone)
    if zone is None:
        return parsed
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def format_event_datetime(value: str | None, timezone: str | None = None) -> str | None:
    parsed = parse_event_datetime(value, timezone)
    if parsed is None:
        return None
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return (
        f"{MONTH_NAMES[parsed.month - 1]} {parsed.day:02d}, {parsed.year} "
        f"{hour:02d}:{parsed.minute:02d} {meridiem}"
    )


def decode_title(title: str) -> str:
    return html.unescape(title or "")


def to_list_item(event: EventRecord) -> ListItem:
    start_label = format_event_datetime(event.start_date, event.timezone)
    end_label = format_event_datetime(event.end_date, event.timezone)
    if start_label is None or end_label is None:
        start_label = end_label = None

    return ListItem(
        title=decode_title(event.title),
        url=event.url,
        slug=event.slug,
        start_label=start_label,
        end_label=end_label,
        image_url=event.image.preferred_url if event.image else None,
    )


def to_list_view_model(events: Iterable[EventRecord]) -> list[ListItem]:
    return [to_list_item(event) for event in events]


def to_calendar_item(event: EventRecord) -> CalendarItem:
    return CalendarItem(
        title=decode_title(event.title),
        start=event.start_date,
        end=event.end_date,
        all_day=event.all_day,
        url=event.url,
    )


def to_calendar_view_model(events: Iterable[EventRecord]) -> list[CalendarItem]:
    return [to_calendar_item(event) for event in events]


def render_events(
    events: Iterable[EventRecord],
    view_type: ViewType | str,
) -> list[ListItem] | list[CalendarItem]:
    """Dispatch to the view model matching ``view_type``."""

    if ViewType(view_type) is ViewType.CALENDAR:
        return to_calendar_view_model(events)
    return to_list_view_model(events)
