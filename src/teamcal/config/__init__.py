"""Configuration models and helpers."""

from __future__ import annotations

from .settings import AppSettings, ExportSettings, StorageSettings, SupabaseSettings, UiSettings, get_settings

__all__ = ["AppSettings", "ExportSettings", "StorageSettings", "SupabaseSettings", "UiSettings", "get_settings"]
