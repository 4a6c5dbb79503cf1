from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import TypeAdapter

_DATETIME_ADAPTER = TypeAdapter(datetime)


def parse_datetime(value: Any) -> datetime:
    """Parse a PostgREST timestamp into an aware datetime; naive values are taken as UTC.

    PostgREST trims trailing zeros from fractional seconds (``09:00:00.12+00:00``),
    which ``datetime.fromisoformat`` rejects before Python 3.11.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = _DATETIME_ADAPTER.validate_python(value)
    else:
        raise ValueError(f"Unsupported datetime value: {value!r}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        parsed = parsed.replace(tzinfo=timezone(parsed.utcoffset()))
    return parsed


def _optional_datetime(value: Any) -> Optional[datetime]:
    return parse_datetime(value) if value else None


@dataclass(slots=True, frozen=True)
class EventTypeRef:
    id: str
    name: str
    color: str = "#000000"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "EventTypeRef":
        return cls(
            id=str(record["id"]),
            name=str(record.get("name") or ""),
            color=record.get("color") or "#000000",
        )


@dataclass(slots=True, frozen=True)
class TeamRef:
    id: str
    name: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TeamRef":
        return cls(id=str(record["id"]), name=str(record.get("name") or ""))


@dataclass(slots=True)
class Event:
    id: str
    title: str
    start_time: datetime
    end_time: datetime
    description: str = ""
    is_all_day: bool = False
    location: Optional[str] = None
    event_type: Optional[EventTypeRef] = None
    team: Optional[TeamRef] = None
    team_id: Optional[str] = None
    event_type_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        event_type_payload = record.get("event_type")
        team_payload = record.get("team")
        event_type = EventTypeRef.from_record(event_type_payload) if event_type_payload else None
        team = TeamRef.from_record(team_payload) if team_payload else None
        return cls(
            id=str(record["id"]),
            title=str(record["title"]),
            start_time=parse_datetime(record["start_time"]),
            end_time=parse_datetime(record["end_time"]),
            description=record.get("description") or "",
            is_all_day=bool(record.get("is_all_day")),
            location=record.get("location"),
            event_type=event_type,
            team=team,
            team_id=record.get("team_id") or (team.id if team else None),
            event_type_id=record.get("event_type_id") or (event_type.id if event_type else None),
            created_at=_optional_datetime(record.get("created_at")),
            updated_at=_optional_datetime(record.get("updated_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time.astimezone(timezone.utc).isoformat(),
            "end_time": self.end_time.astimezone(timezone.utc).isoformat(),
            "event_type_id": self.event_type_id,
            "location": self.location,
            "is_all_day": self.is_all_day,
        }


@dataclass(slots=True, frozen=True)
class ExportRecord:
    user_id: str
    last_export_time: datetime

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ExportRecord":
        return cls(
            user_id=str(record["user_id"]),
            last_export_time=parse_datetime(record["last_export_time"]),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "last_export_time": self.last_export_time.astimezone(timezone.utc).isoformat(),
        }


@dataclass(slots=True, frozen=True)
class ExportOptions:
    """Per-request export descriptor; never persisted."""

    team_id: Optional[str] = None
    event_type_id: Optional[str] = None
    new_events_only: bool = False
    force: bool = False
