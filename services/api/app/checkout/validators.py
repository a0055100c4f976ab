"""Booking form and package form field rules.

Validators return an error message, or None when the value is acceptable. They never
raise on bad input: errors are data that the form renders next to the field.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from services.api.app.checkout.draft import BookingDraft

GENDERS = ("male", "female", "other")

INDIAN_STATES = (
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Delhi", "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand",
    "Karnataka", "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur",
    "Meghalaya", "Mizoram", "Nagaland", "Odisha", "Punjab", "Rajasthan",
    "Sikkim", "Tamil Nadu", "Telangana", "Tripura", "Uttar Pradesh",
    "Uttarakhand", "West Bengal",
)  # fmt: skip

TIME_SLOTS = (
    "6:00 AM - 8:00 AM",
    "8:00 AM - 10:00 AM",
    "10:00 AM - 12:00 PM",
    "12:00 PM - 2:00 PM",
    "2:00 PM - 4:00 PM",
    "4:00 PM - 6:00 PM",
)

COLLECTION_TYPES = ("home", "lab")

MIN_AGE = 1
MAX_AGE = 120

# Bounds of the lab_packages columns: Integer test_count, Numeric(12, 2) prices.
MAX_TEST_COUNT_DIGITS = 9
MAX_AMOUNT = Decimal("9999999999.99")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Indian mobile numbers: 10 digits, leading 6-9.
_PHONE_RE = re.compile(r"^[6-9]\d{9}$", re.ASCII)
_PIN_CODE_RE = re.compile(r"^\d{6}$", re.ASCII)
_INT_RE = re.compile(r"^\d+$", re.ASCII)


def _required(value: str, message: str) -> str | None:
    return message if not (value or "").strip() else None


def validate_full_name(value: str) -> str | None:
    return _required(value, "Full name is required")


def validate_email(value: str) -> str | None:
    value = (value or "").strip()
    if not value:
        return "Email is required"
    if not _EMAIL_RE.match(value):
        return "Email is invalid"
    return None


def validate_phone(value: str) -> str | None:
    value = (value or "").strip()
    if not value:
        return "Phone number is required"
    if not _PHONE_RE.match(value):
        return "Enter valid Indian mobile number"
    return None


def validate_age(value: str) -> str | None:
    value = (value or "").strip()
    if not value:
        return "Age is required"
    if not _INT_RE.match(value):
        return "Age must be a whole number"
    digits = value.lstrip("0") or "0"
    if len(digits) > 3 or not MIN_AGE <= int(digits) <= MAX_AGE:
        return "Age must be between 1-120"
    return None


def validate_gender(value: str) -> str | None:
    if not value:
        return "Gender is required"
    if value not in GENDERS:
        return "Select a valid gender"
    return None


def validate_street_address(value: str) -> str | None:
    return _required(value, "Street address is required")


def validate_city(value: str) -> str | None:
    return _required(value, "City is required")


def validate_state(value: str) -> str | None:
    if not value:
        return "State is required"
    if value not in INDIAN_STATES:
        return "Select a valid state"
    return None


def validate_pin_code(value: str) -> str | None:
    value = (value or "").strip()
    if not value:
        return "PIN code is required"
    if not _PIN_CODE_RE.match(value):
        return "PIN code must be 6 digits"
    return None


def validate_preferred_date(value: str, *, today: date | None = None) -> str | None:
    value = (value or "").strip()
    if not value:
        return "Preferred date is required"
    try:
        chosen = date.fromisoformat(value)
    except ValueError:
        return "Preferred date is invalid"

    tomorrow = (today or date.today()) + timedelta(days=1)
    if chosen < tomorrow:
        return "Preferred date must be tomorrow or later"
    return None


def validate_time_slot(value: str) -> str | None:
    if not value:
        return "Time slot is required"
    if value not in TIME_SLOTS:
        return "Select a valid time slot"
    return None


def validate_collection_type(value: str) -> str | None:
    if not value:
        return "Collection type is required"
    if value not in COLLECTION_TYPES:
        return "Select a valid collection type"
    return None


_FIELD_RULES: dict[str, Callable[[str], str | None]] = {
    "full_name": validate_full_name,
    "email": validate_email,
    "phone": validate_phone,
    "age": validate_age,
    "gender": validate_gender,
    "street_address": validate_street_address,
    "city": validate_city,
    "state": validate_state,
    "pin_code": validate_pin_code,
    "time_slot": validate_time_slot,
    "collection_type": validate_collection_type,
}

# landmark and special_instructions are free text.
OPTIONAL_FIELDS = frozenset({"landmark", "special_instructions"})


def validate_field(draft: BookingDraft, name: str, *, today: date | None = None) -> str | None:
    if name in OPTIONAL_FIELDS:
        return None

    value = getattr(draft, name)
    if name == "preferred_date":
        return validate_preferred_date(value, today=today)

    rule = _FIELD_RULES.get(name)
    if rule is None:
        raise KeyError(name)
    return rule(value)


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse a form number. None when it is blank, unparseable or beyond MAX_AMOUNT."""
    try:
        value = Decimal((raw or "").strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or abs(value) > MAX_AMOUNT:
        return None
    return value


def validate_package_form(
    *,
    name: str | None,
    test_count: str | None,
    price: str | None,
    original_price: str | None = None,
    discount_percentage: str | None = None,
) -> dict[str, str]:
    """Admin package form rules, including the price/original price cross-check."""
    errors: dict[str, str] = {}

    if not (name or "").strip():
        errors["name"] = "Package name is required"

    test_count = (test_count or "").strip()
    if not test_count:
        errors["test_count"] = "Test count is required"
    elif (
        not _INT_RE.match(test_count)
        or len(test_count.lstrip("0")) > MAX_TEST_COUNT_DIGITS
        or int(test_count.lstrip("0") or "0") <= 0
    ):
        errors["test_count"] = "Test count must be a positive number"

    price_num = parse_amount(price) if (price or "").strip() else None
    if not (price or "").strip():
        errors["price"] = "Price is required"
    elif price_num is None or price_num <= 0:
        errors["price"] = "Price must be a valid positive number"

    if (original_price or "").strip():
        original = parse_amount(original_price)
        if original is None or original <= 0:
            errors["original_price"] = "Original price must be a valid positive number"
        elif price_num is not None and original <= price_num:
            errors["original_price"] = "Original price must be greater than current price"

    if (discount_percentage or "").strip():
        pct = parse_amount(discount_percentage)
        if pct is None or pct < 0 or pct >= 100:
            errors["discount_percentage"] = "Discount percentage must be between 0 and 99"

    return errors
