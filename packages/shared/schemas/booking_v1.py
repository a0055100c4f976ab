"""Shared booking payload schema (v1).

This is what the checkout sends to the booking endpoint. Keep it backwards compatible:
the endpoint is operated separately from this service.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class BookingItemV1(BaseModel):
    package_id: str
    package_name: str
    quantity: int = Field(..., ge=1, le=10)
    unit_price: Decimal
    line_total: Decimal


class BookingCustomerV1(BaseModel):
    full_name: str
    email: str
    phone: str
    age: int = Field(..., ge=1, le=120)
    gender: str

    street_address: str
    city: str
    state: str
    pin_code: str
    landmark: str | None = None

    preferred_date: date
    time_slot: str
    collection_type: str
    special_instructions: str | None = None


class BookingTotalsV1(BaseModel):
    item_count: int
    total: Decimal
    original_total: Decimal
    savings: Decimal


class BookingPayloadV1(BaseModel):
    items: list[BookingItemV1] = Field(..., min_length=1)
    customer: BookingCustomerV1
    totals: BookingTotalsV1
