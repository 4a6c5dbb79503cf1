from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..domain import ExportOptions
from ..export import (
    ExportArtifact,
    ExportFailed,
    ExportResult,
    Exported,
    NeedsConfirmation,
    NoEventsToExport,
    serialize_events,
)
from .context import ServiceContext

logger = logging.getLogger(__name__)

FULL_EXPORT_FILENAME = "calendar-events.ics"


@dataclass(slots=True)
class ExportService:
    """Runs one export request end to end: gate, fetch, render, record baseline.

    Only incremental exports move the baseline unless
    ``ExportSettings.reset_baseline_on_full_export`` is enabled.
    """

    context: ServiceContext

    def export_filename(self, options: ExportOptions, moment: datetime) -> str:
        if options.new_events_only:
            day = moment.astimezone(self.context.tz).date()
            return f"calendar-events-new-{day.isoformat()}.ics"
        return FULL_EXPORT_FILENAME

    def request_export(
        self,
        actor_id: str,
        options: ExportOptions,
        *,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        moment = now or datetime.now(timezone.utc)
        settings = self.context.settings.export
        tracker = self.context.tracker

        try:
            if not options.new_events_only and not options.force and tracker.has_export_record(actor_id):
                logger.info("Full export for %s already on record; asking for confirmation", actor_id)
                return NeedsConfirmation()

            events = self.context.fetcher.fetch(actor_id, options, now=moment)
            if not events:
                logger.info("No events to export for %s", actor_id)
                return NoEventsToExport()

            content = serialize_events(
                events,
                product_id=settings.product_id,
                uid_domain=settings.uid_domain,
                generated_at=moment,
            )
            artifact = ExportArtifact(filename=self.export_filename(options, moment), content=content)

            if options.new_events_only or settings.reset_baseline_on_full_export:
                tracker.update_last_export_time(actor_id, now=moment)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Calendar export failed for %s", actor_id)
            return ExportFailed(reason=str(exc) or exc.__class__.__name__)

        logger.info("Exported %d events for %s as %s", len(events), actor_id, artifact.filename)
        return Exported(artifact=artifact, event_count=len(events))
