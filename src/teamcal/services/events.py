from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from ..domain import Event, EventTypeRef
from .context import ServiceContext

logger = logging.getLogger(__name__)


class EventValidationError(ValueError):
    """Raised when an event payload would violate calendar invariants."""


def search_events(events: Iterable[Event], term: str) -> List[Event]:
    """Case-insensitive substring match on title, description or location."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(events)
    matches: list[Event] = []
    for event in events:
        haystacks = (event.title, event.description or "", event.location or "")
        if any(needle in value.lower() for value in haystacks):
            matches.append(event)
    return matches


@dataclass(slots=True)
class EventService:
    context: ServiceContext

    def list_between(
        self,
        start: datetime,
        end: datetime,
        *,
        team_id: Optional[str] = None,
        event_type_id: Optional[str] = None,
    ) -> list[Event]:
        return self.context.events.fetch_overlapping(start, end, team_id=team_id, event_type_id=event_type_id)

    def list_event_types(self, organisation_id: str) -> list[EventTypeRef]:
        return self.context.event_types.list_for_organisation(organisation_id)

    def save_event(
        self,
        *,
        event_id: Optional[str],
        title: str,
        start_time: datetime,
        end_time: datetime,
        team_id: str,
        event_type_id: str,
        description: str = "",
        location: Optional[str] = None,
        is_all_day: bool = False,
    ) -> Optional[Event]:
        """Insert a new event, or update ``event_id`` in place."""

        if not team_id or not event_type_id:
            raise EventValidationError("Please select a team and event type")
        if not title.strip():
            raise EventValidationError("Event title is required")
        if end_time < start_time:
            raise EventValidationError("End time must be after start time")

        payload = Event(
            id=event_id or "",
            title=title,
            start_time=start_time,
            end_time=end_time,
            description=description,
            location=location,
            is_all_day=is_all_day,
            team_id=team_id,
            event_type_id=event_type_id,
        ).to_record()

        if event_id:
            logger.info("Updating event %s", event_id)
            return self.context.events.update(event_id, payload)
        logger.info("Creating event %r", title)
        return self.context.events.insert(payload)

    def move_event(self, event_id: str, source_day: date, destination_day: date) -> Optional[Event]:
        """Shift an event by the whole-day distance between two calendar cells."""

        existing = self.context.events.fetch(event_id)
        if existing is None:
            return None
        shift = timedelta(days=(destination_day - source_day).days)
        if not shift:
            return existing
        return self.context.events.update(
            event_id,
            {
                "start_time": (existing.start_time + shift).isoformat(),
                "end_time": (existing.end_time + shift).isoformat(),
            },
        )

    def delete_event(self, event_id: str) -> bool:
        deleted = self.context.events.delete(event_id)
        if not deleted:
            logger.warning("Delete requested for unknown event %s", event_id)
        return deleted
