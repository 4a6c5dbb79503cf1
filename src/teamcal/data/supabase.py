from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from supabase import Client, create_client

from ..config.settings import SupabaseSettings


class SupabaseNotInitializedError(RuntimeError):
    """Raised when accessing the Supabase client before initialization."""


class SupabaseSessionMissingError(RuntimeError):
    """Raised when an actor-scoped action is attempted without a session."""


@dataclass
class SupabaseGateway:
    """Lazily created Supabase client plus the signed-in session, if any."""

    settings: SupabaseSettings
    _client: Optional[Client] = None
    _session: Optional[Any] = None

    def ensure_client(self) -> Client:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise SupabaseNotInitializedError(f"Supabase settings are incomplete; missing {missing}.")
        self._client = create_client(self.settings.url, self.settings.anon_key)
        return self._client

    def set_session(self, session: Any) -> None:
        self._session = session

    def clear_session(self) -> None:
        self._session = None

    def session(self) -> Any:
        if self._session is None:
            raise SupabaseSessionMissingError("Supabase session is not available.")
        return self._session

    def current_user_id(self) -> str:
        session = self.session()
        user = getattr(session, "user", None)
        identifier = getattr(user, "id", None)
        if not identifier:
            raise SupabaseSessionMissingError("Supabase session has no user id.")
        return str(identifier)

    def is_ready(self) -> bool:
        return self._client is not None and self._session is not None

    def table(self, name: str):
        return self.ensure_client().table(name)
