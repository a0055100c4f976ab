from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from services.api.app.checkout.workflow import CheckoutWorkflow


@dataclass
class CheckoutSession:
    id: str
    workflow: CheckoutWorkflow
    created_at: datetime = field(default_factory=datetime.utcnow)


class InMemoryStore:
    def __init__(self) -> None:
        self._sessions: dict[str, CheckoutSession] = {}

    def create_session(self, *, submit_timeout: float) -> CheckoutSession:
        session = CheckoutSession(
            id=uuid4().hex,
            workflow=CheckoutWorkflow(submit_timeout=submit_timeout),
        )
        self._sessions[session.id] = session
        return session

    def get_session(self, session_id: str) -> CheckoutSession | None:
        return self._sessions.get(session_id)


store = InMemoryStore()
