from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1, EventV1
from services.api.app.db.deps import get_db
from services.api.app.db.models import EventLog
from services.api.app.services.store import store
from sqlalchemy.orm import Session

router = APIRouter()


@router.get("/v1/sessions/{session_id}/events", response_model=list[EventV1])
def list_session_events(session_id: str, db: Session = Depends(get_db)) -> list[EventV1]:
    rows = (
        db.query(EventLog)
        .filter(EventLog.session_id == session_id)
        .order_by(EventLog.created_at.asc())
        .limit(500)
        .all()
    )

    # Sessions are in-memory; their events outlive them across restarts.
    if not rows and store.get_session(session_id) is None:
        raise HTTPException(status_code=404, detail="Checkout session not found")

    return [
        EventV1(
            id=r.id,
            session_id=r.session_id,
            entity_type=EntityTypeV1(r.entity_type),
            entity_id=r.entity_id,
            event_type=EventTypeV1(r.event_type),
            payload=r.event_payload_json,
            created_at=r.created_at.isoformat(),
        )
        for r in rows
    ]
