from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field
from services.api.app.models.cart import CartOut


class DraftUpdateRequest(BaseModel):
    modifications: dict[str, str | int | None] = Field(default_factory=dict)


class ConfirmationOut(BaseModel):
    booking_id: str
    summary: str
    vendor: str
    total: Decimal
    item_count: int
    confirmed_at: datetime


class CheckoutStateOut(BaseModel):
    session_id: str
    step: str
    submitting: bool
    cart: CartOut
    draft: dict[str, str]
    errors: dict[str, str] = Field(default_factory=dict)
    confirmation: ConfirmationOut | None = None
    last_error: str | None = None


class ValidationOut(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


class SubmitResponse(BaseModel):
    status: str
    message: str
    booking_id: str | None = None
    detail: str | None = None
    errors: dict[str, str] = Field(default_factory=dict)
    state: CheckoutStateOut
