from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain import ExportRecord
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class ExportStateRepository:
    """Rows of ``(user_id, last_export_time)``; ``user_id`` carries a unique constraint."""

    gateway: SupabaseGateway
    table_name: str

    def latest(self, user_id: str) -> Optional[ExportRecord]:
        response = (
            self.gateway.table(self.table_name)
            .select("*")
            .eq("user_id", user_id)
            .order("last_export_time", desc=True)
            .limit(1)
            .execute()
        )
        records = response.data or []
        return ExportRecord.from_record(records[0]) if records else None

    def exists(self, user_id: str) -> bool:
        response = (
            self.gateway.table(self.table_name)
            .select("user_id")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return bool(response.data or [])

    def upsert(self, record: ExportRecord) -> ExportRecord:
        response = (
            self.gateway.table(self.table_name)
            .upsert(record.to_record(), on_conflict="user_id")
            .execute()
        )
        records = response.data or []
        return ExportRecord.from_record(records[0]) if records else record
