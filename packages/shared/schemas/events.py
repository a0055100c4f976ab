"""Shared event schema (v1).

The backend stores an append-only event log per checkout session. Clients can consume
these events to render an audit trail.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EntityTypeV1(str, Enum):
    SESSION = "Session"
    CART = "Cart"
    CART_ITEM = "CartItem"
    BOOKING_DRAFT = "BookingDraft"
    BOOKING = "Booking"


class EventTypeV1(str, Enum):
    SESSION_CREATED = "SESSION_CREATED"
    CART_ITEM_ADDED = "CART_ITEM_ADDED"
    CART_ITEM_UPDATED = "CART_ITEM_UPDATED"
    CART_ITEM_REMOVED = "CART_ITEM_REMOVED"
    CART_CLEARED = "CART_CLEARED"
    CART_RESTORED = "CART_RESTORED"
    CHECKOUT_STEP_CHANGED = "CHECKOUT_STEP_CHANGED"
    DRAFT_MODIFIED = "DRAFT_MODIFIED"
    BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
    BOOKING_FAILED = "BOOKING_FAILED"


class EventV1(BaseModel):
    id: str
    session_id: str

    entity_type: EntityTypeV1
    entity_id: str

    event_type: EventTypeV1
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: str
