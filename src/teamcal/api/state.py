from __future__ import annotations

from dataclasses import dataclass, field

from ..services import AuthService, EventService, ExportService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    auth: AuthService = field(init=False)
    events: EventService = field(init=False)
    export: ExportService = field(init=False)

    def __post_init__(self) -> None:
        self.bind(self.context)

    def bind(self, context: ServiceContext) -> None:
        """Point every service at ``context``."""

        self.context = context
        self.auth = AuthService(context)
        self.events = EventService(context)
        self.export = ExportService(context)


api_state = ApiState()
