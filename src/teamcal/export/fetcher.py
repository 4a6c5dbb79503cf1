from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from ..data.repositories import EventRepository
from ..domain import Event, ExportOptions
from .tracker import ExportStateTracker

logger = logging.getLogger(__name__)


def year_window(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """First and last instant of the calendar year containing ``now`` in ``tz``."""

    local = now.astimezone(tz)
    start = datetime(local.year, 1, 1, tzinfo=tz)
    end = datetime(local.year, 12, 31, 23, 59, 59, 999999, tzinfo=tz)
    return start, end


@dataclass(slots=True)
class EventFetcher:
    events: EventRepository
    tracker: ExportStateTracker
    tz: tzinfo

    def fetch(self, actor_id: str, options: ExportOptions, *, now: Optional[datetime] = None) -> List[Event]:
        start, end = year_window(now or datetime.now(timezone.utc), self.tz)

        created_after: Optional[datetime] = None
        if options.new_events_only:
            created_after = self.tracker.get_last_export_time(actor_id)
            if created_after is None:
                logger.info("No previous export for %s; exporting every event in %s", actor_id, start.year)

        events = self.events.fetch_starting_between(
            start,
            end,
            team_id=options.team_id,
            event_type_id=options.event_type_id,
            created_after=created_after,
        )
        logger.debug("Fetched %d events for export (%s to %s)", len(events), start.isoformat(), end.isoformat())
        return events
