from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .context import ServiceContext


@dataclass(slots=True)
class AuthService:
    context: ServiceContext

    def _client(self):
        return self.context.gateway.ensure_client()

    def sign_in_with_password(self, email: str, password: str) -> Any:
        response = self._client().auth.sign_in_with_password({"email": email, "password": password})
        session = getattr(response, "session", None)
        if session:
            self.context.gateway.set_session(session)
        return response

    def current_actor_id(self) -> str:
        return self.context.gateway.current_user_id()

    def sign_out(self) -> None:
        try:
            self._client().auth.sign_out()
        finally:
            self.context.gateway.clear_session()
