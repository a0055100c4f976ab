from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1
from services.api.app.checkout.workflow import CheckoutStep, SubmissionStatus
from services.api.app.db.deps import get_checkout_session, get_db
from services.api.app.models.checkout import (
    CheckoutStateOut,
    DraftUpdateRequest,
    SubmitResponse,
    ValidationOut,
)
from services.api.app.routers.common import log_event, raise_checkout_http_error, state_out
from services.api.app.services.booking_factory import get_booking_submitter
from services.api.app.services.store import CheckoutSession
from sqlalchemy.orm import Session

router = APIRouter()


def _log_step(db: Session, session: CheckoutSession, previous: CheckoutStep) -> None:
    log_event(
        db,
        session_id=session.id,
        entity_type=EntityTypeV1.SESSION,
        entity_id=session.id,
        event_type=EventTypeV1.CHECKOUT_STEP_CHANGED,
        event_payload={"from": previous.value, "to": session.workflow.step.value},
    )


@router.post("/v1/sessions/{session_id}/checkout/proceed", response_model=CheckoutStateOut)
def proceed_to_details(
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CheckoutStateOut:
    wf = session.workflow
    previous = wf.step
    try:
        moved = wf.proceed_to_details()
    except Exception as e:
        raise_checkout_http_error(e)

    if not moved:
        raise HTTPException(status_code=409, detail="Cart is empty")

    _log_step(db, session, previous)
    db.commit()
    return state_out(session)


@router.post("/v1/sessions/{session_id}/checkout/back", response_model=CheckoutStateOut)
def back_to_cart(
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CheckoutStateOut:
    previous = session.workflow.step
    try:
        session.workflow.back_to_cart()
    except Exception as e:
        raise_checkout_http_error(e)

    _log_step(db, session, previous)
    db.commit()
    return state_out(session)


@router.patch("/v1/sessions/{session_id}/checkout/draft", response_model=CheckoutStateOut)
def modify_draft(
    payload: DraftUpdateRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CheckoutStateOut:
    values = {k: "" if v is None else str(v) for k, v in payload.modifications.items()}
    try:
        session.workflow.ensure_idle()
        session.workflow.form.update_fields(values)
    except Exception as e:
        raise_checkout_http_error(e)

    if values:
        # Field names only: the draft holds personal data.
        log_event(
            db,
            session_id=session.id,
            entity_type=EntityTypeV1.BOOKING_DRAFT,
            entity_id=session.id,
            event_type=EventTypeV1.DRAFT_MODIFIED,
            event_payload={"fields": sorted(values)},
        )
        db.commit()

    return state_out(session)


@router.post("/v1/sessions/{session_id}/checkout/validate", response_model=ValidationOut)
def validate_draft(session: CheckoutSession = Depends(get_checkout_session)) -> ValidationOut:
    errors = session.workflow.form.validate_all()
    return ValidationOut(valid=not errors, errors=errors)


@router.post("/v1/sessions/{session_id}/checkout/submit", response_model=SubmitResponse)
async def submit_booking(
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> SubmitResponse:
    try:
        submitter = get_booking_submitter()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    wf = session.workflow
    previous = wf.step
    try:
        outcome = await wf.submit(submitter)
    except Exception as e:
        raise_checkout_http_error(e)

    if outcome.status == SubmissionStatus.CONFIRMED:
        log_event(
            db,
            session_id=session.id,
            entity_type=EntityTypeV1.BOOKING,
            entity_id=outcome.booking_id or "",
            event_type=EventTypeV1.BOOKING_CONFIRMED,
            event_payload={
                "vendor": submitter.vendor,
                "total": str(wf.confirmation.total) if wf.confirmation else None,
                "item_count": wf.confirmation.item_count if wf.confirmation else 0,
            },
        )
        _log_step(db, session, previous)
    elif outcome.status == SubmissionStatus.FAILED:
        log_event(
            db,
            session_id=session.id,
            entity_type=EntityTypeV1.BOOKING,
            entity_id=session.id,
            event_type=EventTypeV1.BOOKING_FAILED,
            event_payload={"vendor": submitter.vendor, "detail": outcome.detail},
        )
    # Sync session: commit off the event loop.
    await run_in_threadpool(db.commit)

    return SubmitResponse(
        status=outcome.status.value,
        message=outcome.message,
        booking_id=outcome.booking_id,
        detail=outcome.detail,
        errors=outcome.errors,
        state=state_out(session),
    )


@router.post("/v1/sessions/{session_id}/checkout/restart", response_model=CheckoutStateOut)
def start_over(
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CheckoutStateOut:
    previous = session.workflow.step
    try:
        session.workflow.start_over()
    except Exception as e:
        raise_checkout_http_error(e)

    _log_step(db, session, previous)
    db.commit()
    return state_out(session)
