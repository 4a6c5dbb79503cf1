from __future__ import annotations

from dataclasses import dataclass

from ...domain import EventTypeRef
from ..supabase import SupabaseGateway


@dataclass(slots=True)
class EventTypeRepository:
    gateway: SupabaseGateway
    table_name: str

    def list_for_organisation(self, organisation_id: str) -> list[EventTypeRef]:
        response = (
            self.gateway.table(self.table_name)
            .select("*")
            .eq("organisation_id", organisation_id)
            .order("name")
            .execute()
        )
        return [EventTypeRef.from_record(record) for record in response.data or []]
