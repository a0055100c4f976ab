from __future__ import annotations

from decimal import Decimal

from packages.shared.schemas.catalog_v1 import PackagePricingV1, PackageV1
from pydantic import BaseModel, Field


class PackageOut(BaseModel):
    package: PackageV1
    pricing: PackagePricingV1


class PackageFormRequest(BaseModel):
    # Raw form values, validated as the admin form submits them.
    name: str | None = None
    test_count: str | None = None
    price: str | None = None
    original_price: str | None = None
    discount_percentage: str | None = None


class PricingPreviewOut(BaseModel):
    price: Decimal
    original_price: Decimal
    discount_percentage: Decimal
    calculated_discount_price: Decimal | None = None
    savings: Decimal
    actual_discount_percentage: Decimal
    has_discount: bool


class PackageFormResponse(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    preview: PricingPreviewOut
