from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .ical import MEDIA_TYPE


@dataclass(slots=True, frozen=True)
class ExportArtifact:
    filename: str
    content: str
    media_type: str = MEDIA_TYPE

    def write_to(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / self.filename
        target.write_text(self.content, encoding="utf-8", newline="")
        return target


@dataclass(slots=True, frozen=True)
class Exported:
    artifact: ExportArtifact
    event_count: int


@dataclass(slots=True, frozen=True)
class NeedsConfirmation:
    """A full export was already recorded; re-run with ``force`` to proceed."""


@dataclass(slots=True, frozen=True)
class NoEventsToExport:
    pass


@dataclass(slots=True, frozen=True)
class ExportFailed:
    reason: str


ExportResult = Union[Exported, NeedsConfirmation, NoEventsToExport, ExportFailed]


def requires_confirmation(result: ExportResult) -> bool:
    return isinstance(result, NeedsConfirmation)
