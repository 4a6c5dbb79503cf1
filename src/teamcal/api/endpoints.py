from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from ..domain import ExportOptions, parse_datetime
from ..services import search_events as filter_events
from .models import ExportStatusPayload
from .registry import register_api
from .serializers import serialize_event, serialize_event_type, serialize_export_result
from .state import api_state


def _require_actor() -> str:
    """Resolve the signed-in user once, at the API boundary."""

    if not api_state.context.gateway.is_ready():
        raise RuntimeError("Supabase session is not initialized. Authenticate before calling API functions.")
    return api_state.context.gateway.current_user_id()


def _parse_datetime(timestamp: str) -> datetime:
    try:
        return parse_datetime(timestamp)
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid ISO timestamp: {timestamp}") from exc


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid ISO date: {value}") from exc


@register_api(
    "export_calendar",
    description="Export this year's events as iCalendar text. Full exports already on record need force=True.",
    category="export",
    tags=("export", "ics"),
)
def export_calendar(
    team_id: Optional[str] = None,
    event_type_id: Optional[str] = None,
    new_events_only: bool = False,
    force: bool = False,
) -> Dict[str, Any]:
    actor_id = _require_actor()
    options = ExportOptions(
        team_id=team_id or None,
        event_type_id=event_type_id or None,
        new_events_only=new_events_only,
        force=force,
    )
    result = api_state.export.request_export(actor_id, options)
    return serialize_export_result(result)


@register_api(
    "export_status",
    description="Report the signed-in user's last recorded export time.",
    category="export",
    tags=("export", "read"),
)
def export_status() -> Dict[str, Any]:
    actor_id = _require_actor()
    tracker = api_state.context.tracker
    last = tracker.get_last_export_time(actor_id)
    payload = ExportStatusPayload(
        user_id=actor_id,
        last_export_time=last.isoformat() if last else None,
        has_export_record=last is not None,
    )
    return payload.model_dump()


@register_api(
    "events_between",
    description="Return events overlapping the range, optionally filtered by team and event type.",
    category="calendar",
    tags=("read",),
)
def events_between(
    start: str,
    end: str,
    team_id: Optional[str] = None,
    event_type_id: Optional[str] = None,
) -> Dict[str, Any]:
    _require_actor()
    start_dt = _parse_datetime(start)
    end_dt = _parse_datetime(end)
    events = api_state.events.list_between(start_dt, end_dt, team_id=team_id, event_type_id=event_type_id)
    return {
        "start": start_dt.isoformat(),
        "end": end_dt.isoformat(),
        "events": [serialize_event(event) for event in events],
    }


@register_api(
    "search_events",
    description="Search events in the range by title, description, or location.",
    category="calendar",
    tags=("read", "search"),
)
def search_events(start: str, end: str, term: str) -> Dict[str, Any]:
    _require_actor()
    events = api_state.events.list_between(_parse_datetime(start), _parse_datetime(end))
    matches = filter_events(events, term)
    return {"term": term, "events": [serialize_event(event) for event in matches]}


@register_api(
    "save_event",
    description="Create an event, or update it when event_id is given.",
    category="calendar",
    tags=("create", "update"),
)
def save_event(
    title: str,
    start_time: str,
    end_time: str,
    team_id: str,
    event_type_id: str,
    event_id: Optional[str] = None,
    description: str = "",
    location: Optional[str] = None,
    is_all_day: bool = False,
) -> Dict[str, Any]:
    _require_actor()
    saved = api_state.events.save_event(
        event_id=event_id,
        title=title,
        start_time=_parse_datetime(start_time),
        end_time=_parse_datetime(end_time),
        team_id=team_id,
        event_type_id=event_type_id,
        description=description,
        location=location,
        is_all_day=is_all_day,
    )
    return {"event": serialize_event(saved) if saved else None}


@register_api(
    "move_event",
    description="Move an event from one calendar day to another, keeping its times of day.",
    category="calendar",
    tags=("update", "reschedule"),
)
def move_event(event_id: str, source_day: str, destination_day: str) -> Dict[str, Any]:
    _require_actor()
    moved = api_state.events.move_event(event_id, _parse_date(source_day), _parse_date(destination_day))
    return {"event": serialize_event(moved) if moved else None}


@register_api(
    "delete_event",
    description="Delete an event by id.",
    category="calendar",
    tags=("delete",),
)
def delete_event(event_id: str) -> Dict[str, Any]:
    _require_actor()
    return {"event_id": event_id, "deleted": api_state.events.delete_event(event_id)}


@register_api(
    "list_event_types",
    description="List an organisation's event types with display colours.",
    category="calendar",
    tags=("read", "event_types"),
)
def list_event_types(organisation_id: str) -> Dict[str, Any]:
    _require_actor()
    event_types = api_state.events.list_event_types(organisation_id)
    return {"event_types": [serialize_event_type(item) for item in event_types]}
