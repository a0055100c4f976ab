from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class CartItemAddRequest(BaseModel):
    package_id: str
    quantity: int = 1


class CartItemUpdateRequest(BaseModel):
    # Out-of-range values are accepted here and ignored by the cart.
    quantity: int


class CartRestoreEntry(BaseModel):
    package_id: str
    quantity: int


class CartRestoreRequest(BaseModel):
    items: list[CartRestoreEntry] = Field(default_factory=list)


class CartLineOut(BaseModel):
    package_id: str
    name: str
    test_count: int
    quantity: int
    unit_price: Decimal
    reference_price: Decimal
    line_total: Decimal
    line_savings: Decimal
    discount_percentage: Decimal | None = None


class CartOut(BaseModel):
    session_id: str
    items: list[CartLineOut]
    item_count: int
    total: Decimal
    original_total: Decimal
    savings: Decimal
    is_empty: bool
