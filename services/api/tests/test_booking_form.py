from datetime import date

import pytest
from services.api.app.checkout.draft import BookingDraft
from services.api.app.checkout.form import BookingFormController

INVALID_VALUES = {
    "full_name": "  ",
    "email": "not-an-email",
    "phone": "1234567890",
    "age": "130",
    "gender": "robot",
    "street_address": "",
    "city": " ",
    "state": "Narnia",
    "pin_code": "12345",
    "preferred_date": "2000-01-01",
    "time_slot": "3:00 AM - 4:00 AM",
    "collection_type": "post",
}


def _form(fields: dict[str, str]) -> BookingFormController:
    return BookingFormController(BookingDraft(**fields))


def test_validate_all_on_valid_draft_is_empty(booking_fields: dict[str, str]) -> None:
    form = _form(booking_fields)
    assert form.validate_all() == {}
    assert form.is_valid() is True


@pytest.mark.parametrize("field", sorted(INVALID_VALUES))
def test_single_invalid_field_yields_exactly_that_key(
    booking_fields: dict[str, str], field: str
) -> None:
    form = _form({**booking_fields, field: INVALID_VALUES[field]})
    errors = form.validate_all()
    assert set(errors) == {field}
    assert form.is_valid() is False


def test_optional_fields_never_error(booking_fields: dict[str, str]) -> None:
    form = _form({**booking_fields, "landmark": "", "special_instructions": ""})
    assert form.is_valid()


def test_empty_draft_reports_every_required_field() -> None:
    errors = BookingFormController().validate_all()
    assert set(errors) == set(INVALID_VALUES)
    assert errors["full_name"] == "Full name is required"
    assert errors["collection_type"] == "Collection type is required"


def test_update_field_clears_error_once_fixed(booking_fields: dict[str, str]) -> None:
    form = _form({**booking_fields, "phone": "12"})
    form.validate_all()
    assert "phone" in form.errors

    assert form.update_field("phone", "98765") == "Enter valid Indian mobile number"
    assert "phone" in form.errors

    assert form.update_field("phone", "9876543210") is None
    assert "phone" not in form.errors


def test_update_field_only_touches_that_field() -> None:
    form = BookingFormController()
    form.validate_all()
    before = form.errors

    form.update_field("city", "Pune")
    after = form.errors
    assert "city" not in after
    assert {k: v for k, v in before.items() if k != "city"} == after


def test_update_field_rejects_unknown_names() -> None:
    form = BookingFormController()
    with pytest.raises(KeyError):
        form.update_field("blood_group", "O+")
    with pytest.raises(KeyError):
        form.update_fields({"city": "Pune", "blood_group": "O+"})
    assert form.draft.city == ""


def test_preferred_date_uses_injected_clock(booking_fields: dict[str, str]) -> None:
    form = BookingFormController(
        BookingDraft(**{**booking_fields, "preferred_date": "2030-06-02"}),
        today=lambda: date(2030, 6, 1),
    )
    assert form.is_valid()

    form = BookingFormController(
        BookingDraft(**{**booking_fields, "preferred_date": "2030-06-01"}),
        today=lambda: date(2030, 6, 1),
    )
    assert form.validate_all() == {"preferred_date": "Preferred date must be tomorrow or later"}


def test_reset_clears_draft_and_errors(booking_fields: dict[str, str]) -> None:
    form = _form(booking_fields)
    form.update_field("phone", "1")
    form.reset()

    assert form.draft == BookingDraft()
    assert form.errors == {}
