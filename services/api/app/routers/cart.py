from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.events import EntityTypeV1, EventTypeV1
from services.api.app.config import CheckoutSettings
from services.api.app.db.deps import get_catalog, get_checkout_session, get_db
from services.api.app.models.cart import (
    CartItemAddRequest,
    CartItemUpdateRequest,
    CartOut,
    CartRestoreRequest,
)
from services.api.app.models.checkout import CheckoutStateOut
from services.api.app.routers.common import (
    cart_out,
    log_event,
    raise_checkout_http_error,
    state_out,
)
from services.api.app.services.catalog import SqlCatalogProvider
from services.api.app.services.store import CheckoutSession, store
from sqlalchemy.orm import Session

router = APIRouter()


def _ensure_idle(session: CheckoutSession) -> None:
    try:
        session.workflow.ensure_idle()
    except Exception as e:
        raise_checkout_http_error(e)


@router.post("/v1/sessions", response_model=CheckoutStateOut)
def create_session(db: Session = Depends(get_db)) -> CheckoutStateOut:
    settings = CheckoutSettings.from_env()
    session = store.create_session(submit_timeout=settings.submit_timeout_seconds)

    log_event(
        db,
        session_id=session.id,
        entity_type=EntityTypeV1.SESSION,
        entity_id=session.id,
        event_type=EventTypeV1.SESSION_CREATED,
        event_payload={"submit_timeout_seconds": settings.submit_timeout_seconds},
    )
    db.commit()
    return state_out(session)


@router.get("/v1/sessions/{session_id}", response_model=CheckoutStateOut)
def get_session(session: CheckoutSession = Depends(get_checkout_session)) -> CheckoutStateOut:
    return state_out(session)


@router.get("/v1/sessions/{session_id}/cart", response_model=CartOut)
def get_cart(session: CheckoutSession = Depends(get_checkout_session)) -> CartOut:
    return cart_out(session.id, session.workflow.cart)


@router.post("/v1/sessions/{session_id}/cart/items", response_model=CartOut)
def add_cart_item(
    payload: CartItemAddRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    catalog: SqlCatalogProvider = Depends(get_catalog),
    db: Session = Depends(get_db),
) -> CartOut:
    _ensure_idle(session)

    package = catalog.get_package(payload.package_id)
    if package is None:
        raise HTTPException(status_code=404, detail="Package not found")

    cart = session.workflow.cart
    item = cart.add(package, payload.quantity)

    log_event(
        db,
        session_id=session.id,
        entity_type=EntityTypeV1.CART_ITEM,
        entity_id=package.id,
        event_type=EventTypeV1.CART_ITEM_ADDED,
        event_payload={"requested_quantity": payload.quantity, "quantity": item.quantity},
    )
    db.commit()
    return cart_out(session.id, cart)


@router.patch("/v1/sessions/{session_id}/cart/items/{package_id}", response_model=CartOut)
def update_cart_item(
    package_id: str,
    payload: CartItemUpdateRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CartOut:
    _ensure_idle(session)

    cart = session.workflow.cart
    if cart.update_quantity(package_id, payload.quantity):
        log_event(
            db,
            session_id=session.id,
            entity_type=EntityTypeV1.CART_ITEM,
            entity_id=package_id,
            event_type=EventTypeV1.CART_ITEM_UPDATED,
            event_payload={"quantity": payload.quantity},
        )
        db.commit()

    return cart_out(session.id, cart)


@router.delete("/v1/sessions/{session_id}/cart/items/{package_id}", response_model=CartOut)
def remove_cart_item(
    package_id: str,
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CartOut:
    _ensure_idle(session)

    cart = session.workflow.cart
    if cart.remove(package_id):
        log_event(
            db,
            session_id=session.id,
            entity_type=EntityTypeV1.CART_ITEM,
            entity_id=package_id,
            event_type=EventTypeV1.CART_ITEM_REMOVED,
            event_payload={},
        )
        db.commit()

    return cart_out(session.id, cart)


@router.post("/v1/sessions/{session_id}/cart/clear", response_model=CheckoutStateOut)
def clear_cart(
    session: CheckoutSession = Depends(get_checkout_session),
    db: Session = Depends(get_db),
) -> CheckoutStateOut:
    try:
        session.workflow.clear_cart()
    except Exception as e:
        raise_checkout_http_error(e)

    log_event(
        db,
        session_id=session.id,
        entity_type=EntityTypeV1.CART,
        entity_id=session.id,
        event_type=EventTypeV1.CART_CLEARED,
        event_payload={},
    )
    db.commit()
    return state_out(session)


@router.put("/v1/sessions/{session_id}/cart", response_model=CartOut)
def restore_cart(
    payload: CartRestoreRequest,
    session: CheckoutSession = Depends(get_checkout_session),
    catalog: SqlCatalogProvider = Depends(get_catalog),
    db: Session = Depends(get_db),
) -> CartOut:
    _ensure_idle(session)

    entries = []
    skipped: list[str] = []
    for entry in payload.items:
        package = catalog.get_package(entry.package_id)
        if package is None:
            skipped.append(entry.package_id)
            continue
        entries.append((package, entry.quantity))

    cart = session.workflow.cart
    cart.restore(entries)

    log_event(
        db,
        session_id=session.id,
        entity_type=EntityTypeV1.CART,
        entity_id=session.id,
        event_type=EventTypeV1.CART_RESTORED,
        event_payload={"item_count": cart.item_count, "skipped_package_ids": skipped},
    )
    db.commit()
    return cart_out(session.id, cart)
