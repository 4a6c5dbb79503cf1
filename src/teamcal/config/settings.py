from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Team Calendar"
APP_AUTHOR = "TeamCal"


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    events_table: str
    event_types_table: str
    teams_table: str
    exports_table: str


@dataclass(frozen=True)
class ExportSettings:
    product_id: str
    uid_domain: str
    output_dir: Path
    reset_baseline_on_full_export: bool


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    timezone: str


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    export: ExportSettings
    ui: UiSettings


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        events_table=os.getenv("SUPABASE_EVENTS_TABLE", "events"),
        event_types_table=os.getenv("SUPABASE_EVENT_TYPES_TABLE", "event_types"),
        teams_table=os.getenv("SUPABASE_TEAMS_TABLE", "teams"),
        exports_table=os.getenv("SUPABASE_EXPORTS_TABLE", "calendar_exports"),
    )

    export = ExportSettings(
        product_id=os.getenv("TEAMCAL_EXPORT_PRODID", "-//TeamCal//Calendar Export//EN"),
        uid_domain=os.getenv("TEAMCAL_EXPORT_UID_DOMAIN", "teamcal.local"),
        output_dir=Path(os.getenv("TEAMCAL_EXPORT_DIR", user_data_dir(APP_NAME, APP_AUTHOR))),
        reset_baseline_on_full_export=_bool_from_env("TEAMCAL_EXPORT_RESET_BASELINE_ON_FULL", False),
    )

    ui = UiSettings(
        app_name=os.getenv("TEAMCAL_APP_NAME", APP_NAME),
        timezone=os.getenv("TEAMCAL_TIMEZONE", "UTC"),
    )

    return AppSettings(supabase=supabase, storage=storage, export=export, ui=ui)
