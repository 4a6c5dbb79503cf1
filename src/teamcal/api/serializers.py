from __future__ import annotations

from typing import Any, Dict

from ..domain import Event, EventTypeRef
from ..export import ExportResult
from .models import EventPayload, EventTypePayload, ExportOutcomePayload


def serialize_event(event: Event) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump()


def serialize_event_type(event_type: EventTypeRef) -> Dict[str, Any]:
    return EventTypePayload.from_domain(event_type).model_dump()


def serialize_export_result(result: ExportResult) -> Dict[str, Any]:
    return ExportOutcomePayload.from_result(result).model_dump()
