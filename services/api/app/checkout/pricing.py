"""Package pricing.

`price` is always what gets charged. `original_price` only feeds the struck-through
reference price and the savings figures, and only when it is actually above `price`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal

from packages.shared.schemas.catalog_v1 import PackagePricingV1, PackageV1

ZERO = Decimal("0.00")
_HUNDRED = Decimal("100")


def round_money(amount: Decimal, places: int = 2) -> Decimal:
    quantize_str = "0." + "0" * places
    return amount.quantize(Decimal(quantize_str), rounding=ROUND_HALF_EVEN)


def effective_price(pkg: PackageV1) -> Decimal:
    return pkg.price


def reference_price(pkg: PackageV1) -> Decimal:
    if pkg.original_price is not None and pkg.original_price > pkg.price:
        return pkg.original_price
    return pkg.price


def line_savings(pkg: PackageV1, quantity: int) -> Decimal:
    return round_money((reference_price(pkg) - effective_price(pkg)) * quantity)


def discount_percent(pkg: PackageV1) -> Decimal | None:
    """Stored discount percentage, or one derived from the reference price.

    Returns None when there is nothing to derive it from (a zero reference price).
    """
    if pkg.discount_percentage is not None:
        return pkg.discount_percentage

    ref = reference_price(pkg)
    if ref <= 0:
        return None
    return round_money((ref - effective_price(pkg)) / ref * _HUNDRED)


def package_pricing(pkg: PackageV1) -> PackagePricingV1:
    ref = reference_price(pkg)
    return PackagePricingV1(
        effective_price=round_money(effective_price(pkg)),
        reference_price=round_money(ref),
        savings=line_savings(pkg, 1),
        discount_percentage=discount_percent(pkg),
        has_discount=ref > pkg.price,
    )


@dataclass(frozen=True, slots=True)
class PricingPreview:
    price: Decimal
    original_price: Decimal
    discount_percentage: Decimal
    calculated_discount_price: Decimal | None
    savings: Decimal
    actual_discount_percentage: Decimal
    has_discount: bool


def preview_package_pricing(
    price: Decimal | None,
    original_price: Decimal | None,
    discount_percentage: Decimal | None,
) -> PricingPreview:
    """Live preview for the admin package form.

    Missing values count as zero, so a half-filled form still renders.
    """
    price = price or ZERO
    original_price = original_price or ZERO
    discount_percentage = discount_percentage or ZERO

    calculated = None
    if original_price > 0 and discount_percentage > 0:
        calculated = round_money(original_price * (1 - discount_percentage / _HUNDRED))

    savings = original_price - price
    actual = ZERO
    if original_price > 0:
        actual = round_money(savings / original_price * _HUNDRED)

    return PricingPreview(
        price=round_money(price),
        original_price=round_money(original_price),
        discount_percentage=discount_percentage,
        calculated_discount_price=calculated,
        savings=round_money(savings),
        actual_discount_percentage=actual,
        has_discount=original_price > 0 and original_price > price,
    )
