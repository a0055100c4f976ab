from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from packages.shared.schemas.catalog_v1 import PackageV1
from services.api.app.checkout.pricing import (
    ZERO,
    effective_price,
    line_savings,
    reference_price,
    round_money,
)

MIN_QUANTITY = 1
MAX_QUANTITY = 10


def _clamp(quantity: int) -> int:
    return max(MIN_QUANTITY, min(MAX_QUANTITY, quantity))


@dataclass(slots=True)
class CartItem:
    package: PackageV1
    quantity: int

    @property
    def package_id(self) -> str:
        return self.package.id

    @property
    def unit_price(self) -> Decimal:
        return effective_price(self.package)

    @property
    def line_total(self) -> Decimal:
        return round_money(self.unit_price * self.quantity)

    @property
    def line_original_total(self) -> Decimal:
        return round_money(reference_price(self.package) * self.quantity)

    @property
    def line_savings(self) -> Decimal:
        return line_savings(self.package, self.quantity)


class CartStore:
    """Selected packages with quantities, one entry per package id.

    Quantities always stay within [MIN_QUANTITY, MAX_QUANTITY]. Out-of-range updates and
    operations on ids that are not in the cart are ignored rather than reported.
    Totals are recomputed on every read.
    """

    def __init__(self) -> None:
        self._items: dict[str, CartItem] = {}

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def add(self, package: PackageV1, quantity: int = 1) -> CartItem:
        quantity = _clamp(quantity)
        item = self._items.get(package.id)
        if item is None:
            item = CartItem(package=package, quantity=quantity)
            self._items[package.id] = item
        else:
            item.quantity = min(item.quantity + quantity, MAX_QUANTITY)
        return item

    def update_quantity(self, package_id: str, quantity: int) -> bool:
        """Set a quantity in place. Returns False when nothing changed."""
        if quantity < MIN_QUANTITY or quantity > MAX_QUANTITY:
            return False
        item = self._items.get(package_id)
        if item is None:
            return False
        item.quantity = quantity
        return True

    def remove(self, package_id: str) -> bool:
        return self._items.pop(package_id, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def restore(self, entries: Iterable[tuple[PackageV1, int]]) -> None:
        """Rebuild the cart from a client-held snapshot, dropping unusable entries."""
        self._items.clear()
        for package, quantity in entries:
            if quantity < MIN_QUANTITY:
                continue
            self.add(package, quantity)

    def snapshot(self) -> list[tuple[PackageV1, int]]:
        return [(item.package, item.quantity) for item in self._items.values()]

    def is_in_cart(self, package_id: str) -> bool:
        return package_id in self._items

    def quantity_of(self, package_id: str) -> int:
        item = self._items.get(package_id)
        return item.quantity if item else 0

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def total(self) -> Decimal:
        return round_money(sum((item.line_total for item in self._items.values()), ZERO))

    @property
    def original_total(self) -> Decimal:
        return round_money(
            sum((item.line_original_total for item in self._items.values()), ZERO)
        )

    @property
    def savings(self) -> Decimal:
        return max(self.original_total - self.total, ZERO)
