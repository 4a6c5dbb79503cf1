"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .auth import AuthService
from .context import ServiceContext
from .events import EventService, EventValidationError, search_events
from .export import ExportService

__all__ = [
    "AuthService",
    "EventService",
    "EventValidationError",
    "ExportService",
    "ServiceContext",
    "search_events",
]
