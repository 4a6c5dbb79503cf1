from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import AppSettings, get_settings
from ..data import SupabaseGateway
from ..data.repositories import EventRepository, EventTypeRepository, ExportStateRepository
from ..export import EventFetcher, ExportStateTracker


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, gateway, and repositories."""

    settings: AppSettings = field(default_factory=get_settings)
    gateway: Optional[SupabaseGateway] = None
    tz: tzinfo = field(init=False)
    events: EventRepository = field(init=False)
    event_types: EventTypeRepository = field(init=False)
    exports: ExportStateRepository = field(init=False)
    tracker: ExportStateTracker = field(init=False)
    fetcher: EventFetcher = field(init=False)

    def __post_init__(self) -> None:
        if self.gateway is None:
            self.gateway = SupabaseGateway(self.settings.supabase)
        storage = self.settings.storage
        self.tz = resolve_timezone(self.settings.ui.timezone)
        self.events = EventRepository(
            gateway=self.gateway,
            table_name=storage.events_table,
            event_types_table=storage.event_types_table,
            teams_table=storage.teams_table,
        )
        self.event_types = EventTypeRepository(gateway=self.gateway, table_name=storage.event_types_table)
        self.exports = ExportStateRepository(gateway=self.gateway, table_name=storage.exports_table)
        self.tracker = ExportStateTracker(self.exports)
        self.fetcher = EventFetcher(events=self.events, tracker=self.tracker, tz=self.tz)
