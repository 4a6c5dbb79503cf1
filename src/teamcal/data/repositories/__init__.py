"""Supabase repositories for first-class domain objects."""

from __future__ import annotations

from .event_types import EventTypeRepository
from .events import EventRepository
from .exports import ExportStateRepository

__all__ = ["EventRepository", "EventTypeRepository", "ExportStateRepository"]
