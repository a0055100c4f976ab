"""Shared catalog schema (v1).

Package records as the storefront and the checkout engine see them. The engine only
reads these; the admin screens own their lifecycle.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PackageV1(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    test_count: int = Field(default=0, ge=0)

    # Charged price. original_price is the pre-discount price shown struck through.
    price: Decimal = Field(..., ge=0)
    original_price: Decimal | None = None
    discount_percentage: Decimal | None = None

    is_active: bool = True
    description: str | None = None
    category: str | None = None


class PackagePricingV1(BaseModel):
    effective_price: Decimal
    reference_price: Decimal
    savings: Decimal
    discount_percentage: Decimal | None = None
    has_discount: bool
