"""iCalendar serialization of team events.

Every timestamp written here is UTC with whole seconds (``YYYYMMDDTHHMMSSZ``).
Text values go through :mod:`icalendar`, so commas, semicolons, backslashes and
newlines are escaped and long lines folded as RFC 5545 requires.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from icalendar import Calendar
from icalendar import Event as ICalEvent

from ..domain import Event

MEDIA_TYPE = "text/calendar;charset=utf-8"


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)


def _event_component(event: Event, *, uid_domain: str, stamp: datetime) -> ICalEvent:
    component = ICalEvent()
    component.add("uid", f"{event.id}@{uid_domain}")
    component.add("dtstamp", stamp)
    component.add("dtstart", to_utc(event.start_time))
    component.add("dtend", to_utc(event.end_time))
    component.add("summary", event.title)
    component.add("description", event.description or "")
    component.add("location", event.location or "")
    return component


def serialize_events(
    events: Iterable[Event],
    *,
    product_id: str,
    uid_domain: str,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render ``events`` as a VCALENDAR document, one VEVENT per event in input order."""

    stamp = to_utc(generated_at or datetime.now(timezone.utc))
    calendar = Calendar()
    calendar.add("version", "2.0")
    calendar.add("prodid", product_id)
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")
    for event in events:
        calendar.add_component(_event_component(event, uid_domain=uid_domain, stamp=stamp))
    # insertion order, not icalendar's canonical property order
    return calendar.to_ical(sorted=False).decode("utf-8")
