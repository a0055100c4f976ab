from __future__ import annotations

from uuid import uuid4

from fastapi import HTTPException
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1
from services.api.app.checkout.cart import CartItem, CartStore
from services.api.app.checkout.pricing import discount_percent, reference_price, round_money
from services.api.app.checkout.workflow import CheckoutStateError
from services.api.app.db.models import EventLog
from services.api.app.models.cart import CartLineOut, CartOut
from services.api.app.models.checkout import CheckoutStateOut, ConfirmationOut
from services.api.app.services.store import CheckoutSession
from sqlalchemy.orm import Session


def log_event(
    db: Session,
    *,
    session_id: str,
    entity_type: EntityTypeV1,
    entity_id: str,
    event_type: EventTypeV1,
    event_payload: dict,
) -> None:
    db.add(
        EventLog(
            id=uuid4().hex,
            session_id=session_id,
            entity_type=entity_type.value,
            entity_id=entity_id,
            event_type=event_type.value,
            event_payload_json=event_payload,
        )
    )


def raise_checkout_http_error(e: Exception) -> None:
    if isinstance(e, CheckoutStateError):
        raise HTTPException(status_code=409, detail=str(e)) from e

    if isinstance(e, KeyError):
        raise HTTPException(
            status_code=422, detail=f"Unknown booking field(s): {e.args[0] if e.args else ''}"
        ) from e

    raise HTTPException(status_code=500, detail="Internal Server Error") from e


def _line_out(item: CartItem) -> CartLineOut:
    return CartLineOut(
        package_id=item.package_id,
        name=item.package.name,
        test_count=item.package.test_count,
        quantity=item.quantity,
        unit_price=round_money(item.unit_price),
        reference_price=round_money(reference_price(item.package)),
        line_total=item.line_total,
        line_savings=item.line_savings,
        discount_percentage=discount_percent(item.package),
    )


def cart_out(session_id: str, cart: CartStore) -> CartOut:
    return CartOut(
        session_id=session_id,
        items=[_line_out(i) for i in cart.items],
        item_count=cart.item_count,
        total=cart.total,
        original_total=cart.original_total,
        savings=cart.savings,
        is_empty=cart.is_empty,
    )


def state_out(session: CheckoutSession) -> CheckoutStateOut:
    wf = session.workflow
    confirmation = None
    if wf.confirmation is not None:
        c = wf.confirmation
        confirmation = ConfirmationOut(
            booking_id=c.booking_id,
            summary=c.summary,
            vendor=c.vendor,
            total=c.total,
            item_count=c.item_count,
            confirmed_at=c.confirmed_at,
        )

    return CheckoutStateOut(
        session_id=session.id,
        step=wf.step.value,
        submitting=wf.submitting,
        cart=cart_out(session.id, wf.cart),
        draft=wf.form.draft.as_dict(),
        errors=wf.form.errors,
        confirmation=confirmation,
        last_error=wf.last_error,
    )
