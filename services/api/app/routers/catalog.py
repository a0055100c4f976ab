from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from services.api.app.checkout.pricing import package_pricing, preview_package_pricing
from services.api.app.checkout.validators import parse_amount, validate_package_form
from services.api.app.db.deps import get_catalog
from services.api.app.models.catalog import (
    PackageFormRequest,
    PackageFormResponse,
    PackageOut,
    PricingPreviewOut,
)
from services.api.app.services.catalog import SqlCatalogProvider

router = APIRouter()


@router.get("/v1/packages", response_model=list[PackageOut])
def list_packages(catalog: SqlCatalogProvider = Depends(get_catalog)) -> list[PackageOut]:
    return [PackageOut(package=p, pricing=package_pricing(p)) for p in catalog.list_packages()]


@router.get("/v1/packages/{package_id}", response_model=PackageOut)
def get_package(
    package_id: str, catalog: SqlCatalogProvider = Depends(get_catalog)
) -> PackageOut:
    package = catalog.get_package(package_id)
    if package is None:
        raise HTTPException(status_code=404, detail="Package not found")
    return PackageOut(package=package, pricing=package_pricing(package))


@router.post("/v1/packages/validate", response_model=PackageFormResponse)
def validate_package(payload: PackageFormRequest) -> PackageFormResponse:
    errors = validate_package_form(
        name=payload.name,
        test_count=payload.test_count,
        price=payload.price,
        original_price=payload.original_price,
        discount_percentage=payload.discount_percentage,
    )
    preview = preview_package_pricing(
        parse_amount(payload.price),
        parse_amount(payload.original_price),
        parse_amount(payload.discount_percentage),
    )
    return PackageFormResponse(
        valid=not errors,
        errors=errors,
        preview=PricingPreviewOut(
            price=preview.price,
            original_price=preview.original_price,
            discount_percentage=preview.discount_percentage,
            calculated_discount_price=preview.calculated_discount_price,
            savings=preview.savings,
            actual_discount_percentage=preview.actual_discount_percentage,
            has_discount=preview.has_discount,
        ),
    )
