from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..data.repositories import ExportStateRepository
from ..domain import ExportRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExportStateTracker:
    """Per-actor record of the last incremental export."""

    repository: ExportStateRepository

    def get_last_export_time(self, actor_id: str) -> Optional[datetime]:
        record = self.repository.latest(actor_id)
        return record.last_export_time if record else None

    def has_export_record(self, actor_id: str) -> bool:
        return self.repository.exists(actor_id)

    def update_last_export_time(self, actor_id: str, *, now: Optional[datetime] = None) -> ExportRecord:
        """Store ``now`` as the actor's baseline with a single upsert keyed on ``user_id``."""

        moment = now or datetime.now(timezone.utc)
        saved = self.repository.upsert(ExportRecord(user_id=actor_id, last_export_time=moment))
        logger.debug("Recorded export baseline for %s at %s", actor_id, saved.last_export_time.isoformat())
        return saved
