from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ...domain import Event
from ..supabase import SupabaseGateway


def to_timestamp(value: datetime) -> str:
    """Render an aware datetime as a UTC ISO string usable inside PostgREST filters."""

    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(slots=True)
class EventRepository:
    gateway: SupabaseGateway
    table_name: str
    event_types_table: str
    teams_table: str

    def _select_clause(self) -> str:
        return (
            "id, title, description, start_time, end_time, is_all_day, location, "
            "team_id, event_type_id, created_at, updated_at, "
            f"event_type:{self.event_types_table}(id, name, color), "
            f"team:{self.teams_table}(id, name)"
        )

    @staticmethod
    def _apply_filters(query, team_id: Optional[str], event_type_id: Optional[str]):
        if team_id:
            query = query.eq("team_id", team_id)
        if event_type_id:
            query = query.eq("event_type_id", event_type_id)
        return query

    def fetch_starting_between(
        self,
        start: datetime,
        end: datetime,
        *,
        team_id: Optional[str] = None,
        event_type_id: Optional[str] = None,
        created_after: Optional[datetime] = None,
    ) -> List[Event]:
        """Events whose start lies in ``[start, end]``, oldest first."""

        query = (
            self.gateway.table(self.table_name)
            .select(self._select_clause())
            .gte("start_time", to_timestamp(start))
            .lte("start_time", to_timestamp(end))
        )
        query = self._apply_filters(query, team_id, event_type_id)
        if created_after is not None:
            query = query.gt("created_at", to_timestamp(created_after))
        response = query.order("start_time", desc=False).execute()
        return [Event.from_record(record) for record in response.data or []]

    def fetch_overlapping(
        self,
        start: datetime,
        end: datetime,
        *,
        team_id: Optional[str] = None,
        event_type_id: Optional[str] = None,
    ) -> List[Event]:
        """Events that start before ``end`` and start or finish on/after ``start``."""

        lower = to_timestamp(start)
        query = (
            self.gateway.table(self.table_name)
            .select(self._select_clause())
            .or_(f"start_time.gte.{lower},end_time.gte.{lower}")
            .lt("start_time", to_timestamp(end))
        )
        query = self._apply_filters(query, team_id, event_type_id)
        response = query.order("start_time", desc=False).execute()
        return [Event.from_record(record) for record in response.data or []]

    def fetch(self, event_id: str) -> Optional[Event]:
        response = (
            self.gateway.table(self.table_name)
            .select(self._select_clause())
            .eq("id", event_id)
            .limit(1)
            .execute()
        )
        records = response.data or []
        return Event.from_record(records[0]) if records else None

    def insert(self, payload: Dict[str, Any]) -> Optional[Event]:
        response = self.gateway.table(self.table_name).insert(payload).execute()
        records = response.data or []
        return Event.from_record(records[0]) if records else None

    def update(self, event_id: str, payload: Dict[str, Any]) -> Optional[Event]:
        response = (
            self.gateway.table(self.table_name)
            .update(payload)
            .eq("id", event_id)
            .execute()
        )
        records = response.data or []
        return Event.from_record(records[0]) if records else None

    def delete(self, event_id: str) -> bool:
        response = (
            self.gateway.table(self.table_name)
            .delete()
            .eq("id", event_id)
            .execute()
        )
        return bool(response.data or [])
