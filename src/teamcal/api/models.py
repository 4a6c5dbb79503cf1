from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import Event, EventTypeRef, TeamRef
from ..domain.colors import event_background, event_text_color
from ..export import ExportResult, Exported, ExportFailed, NeedsConfirmation, NoEventsToExport


class EventTypePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    color: str
    background: str = Field(default="")
    text_color: str = Field(default="")

    @classmethod
    def from_domain(cls, event_type: EventTypeRef) -> "EventTypePayload":
        return cls(
            id=event_type.id,
            name=event_type.name,
            color=event_type.color,
            background=event_background(event_type.color),
            text_color=event_text_color(event_type.color),
        )


class TeamPayload(BaseModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, team: TeamRef) -> "TeamPayload":
        return cls(id=team.id, name=team.name)


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str = Field(default="")
    start_time: str
    end_time: str
    is_all_day: bool = Field(default=False)
    location: Optional[str] = Field(default=None)
    event_type: Optional[EventTypePayload] = Field(default=None)
    team: Optional[TeamPayload] = Field(default=None)
    team_id: Optional[str] = Field(default=None)
    event_type_id: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None)
    updated_at: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: Event) -> "EventPayload":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            start_time=_iso(event.start_time),
            end_time=_iso(event.end_time),
            is_all_day=event.is_all_day,
            location=event.location,
            event_type=EventTypePayload.from_domain(event.event_type) if event.event_type else None,
            team=TeamPayload.from_domain(event.team) if event.team else None,
            team_id=event.team_id,
            event_type_id=event.event_type_id,
            created_at=_iso(event.created_at),
            updated_at=_iso(event.updated_at),
        )


class ExportRequest(BaseModel):
    team_id: Optional[str] = Field(default=None)
    event_type_id: Optional[str] = Field(default=None)
    new_events_only: bool = Field(default=False)
    force: bool = Field(default=False)


class ExportOutcomePayload(BaseModel):
    status: str
    requires_confirmation: bool = Field(default=False)
    filename: Optional[str] = Field(default=None)
    media_type: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)
    event_count: int = Field(default=0)
    reason: Optional[str] = Field(default=None)

    @classmethod
    def from_result(cls, result: ExportResult) -> "ExportOutcomePayload":
        if isinstance(result, Exported):
            return cls(
                status="exported",
                filename=result.artifact.filename,
                media_type=result.artifact.media_type,
                content=result.artifact.content,
                event_count=result.event_count,
            )
        if isinstance(result, NeedsConfirmation):
            return cls(status="needs_confirmation", requires_confirmation=True)
        if isinstance(result, NoEventsToExport):
            return cls(status="no_events", reason="No events to export")
        if isinstance(result, ExportFailed):
            return cls(status="failed", reason=result.reason)
        raise TypeError(f"Unknown export result: {result!r}")


class ExportStatusPayload(BaseModel):
    user_id: str
    last_export_time: Optional[str] = Field(default=None)
    has_export_record: bool = Field(default=False)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
