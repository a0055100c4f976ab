from decimal import Decimal

import pytest
from packages.shared.schemas.catalog_v1 import PackageV1
from services.api.app.checkout.pricing import (
    discount_percent,
    effective_price,
    line_savings,
    package_pricing,
    preview_package_pricing,
    reference_price,
)


def _pkg(price: str, original: str | None = None, discount: str | None = None) -> PackageV1:
    return PackageV1(
        id="P",
        name="Panel",
        price=Decimal(price),
        original_price=Decimal(original) if original is not None else None,
        discount_percentage=Decimal(discount) if discount is not None else None,
    )


@pytest.mark.parametrize("quantity", [1, 2, 5, 10])
def test_line_savings_scales_with_quantity_when_discounted(quantity: int) -> None:
    pkg = _pkg("899", "1299")
    assert line_savings(pkg, quantity) == Decimal("400") * quantity


@pytest.mark.parametrize(
    ("price", "original"),
    [("899", None), ("899", "899"), ("899", "500")],
)
def test_line_savings_is_zero_without_a_higher_original_price(
    price: str, original: str | None
) -> None:
    pkg = _pkg(price, original)
    assert line_savings(pkg, 3) == Decimal("0")
    assert reference_price(pkg) == pkg.price


def test_effective_price_is_always_the_charged_price() -> None:
    pkg = _pkg("2499", "3499", "50")
    assert effective_price(pkg) == Decimal("2499")
    assert reference_price(pkg) == Decimal("3499")


def test_discount_percent_prefers_stored_value() -> None:
    assert discount_percent(_pkg("560", "800", "30")) == Decimal("30")


def test_discount_percent_is_derived_and_rounded() -> None:
    assert discount_percent(_pkg("899", "1299")) == Decimal("30.79")
    assert discount_percent(_pkg("1000")) == Decimal("0.00")


def test_discount_percent_is_none_for_free_package() -> None:
    assert discount_percent(_pkg("0")) is None


def test_package_pricing_summary() -> None:
    pricing = package_pricing(_pkg("899", "1299"))
    assert pricing.effective_price == Decimal("899.00")
    assert pricing.reference_price == Decimal("1299.00")
    assert pricing.savings == Decimal("400.00")
    assert pricing.has_discount is True

    assert package_pricing(_pkg("899", "500")).has_discount is False


def test_preview_package_pricing() -> None:
    preview = preview_package_pricing(Decimal("560"), Decimal("800"), Decimal("30"))
    assert preview.calculated_discount_price == Decimal("560.00")
    assert preview.savings == Decimal("240.00")
    assert preview.actual_discount_percentage == Decimal("30.00")
    assert preview.has_discount is True


def test_preview_package_pricing_with_missing_values() -> None:
    preview = preview_package_pricing(Decimal("500"), None, None)
    assert preview.calculated_discount_price is None
    assert preview.actual_discount_percentage == Decimal("0.00")
    assert preview.has_discount is False
