"""Domain models for the team calendar."""

from __future__ import annotations

from .models import Event, EventTypeRef, ExportOptions, ExportRecord, TeamRef, parse_datetime

__all__ = ["Event", "EventTypeRef", "ExportOptions", "ExportRecord", "TeamRef", "parse_datetime"]
