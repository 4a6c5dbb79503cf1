"""Calendar export: year-window fetch, iCalendar rendering and export baselines."""

from __future__ import annotations

from .fetcher import EventFetcher, year_window
from .ical import MEDIA_TYPE, serialize_events, to_utc
from .results import (
    ExportArtifact,
    ExportFailed,
    ExportResult,
    Exported,
    NeedsConfirmation,
    NoEventsToExport,
    requires_confirmation,
)
from .tracker import ExportStateTracker

__all__ = [
    "EventFetcher",
    "ExportArtifact",
    "ExportFailed",
    "ExportResult",
    "ExportStateTracker",
    "Exported",
    "MEDIA_TYPE",
    "NeedsConfirmation",
    "NoEventsToExport",
    "requires_confirmation",
    "serialize_events",
    "to_utc",
    "year_window",
]
