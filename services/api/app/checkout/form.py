from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date

from services.api.app.checkout.draft import BookingDraft
from services.api.app.checkout.validators import validate_field

ValidationErrors = dict[str, str]


class BookingFormController:
    """Owns a BookingDraft and its per-field error messages.

    Single-field edits revalidate only that field. Submission always goes through
    validate_all, whatever the per-field state says.
    """

    def __init__(
        self,
        draft: BookingDraft | None = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.draft = draft or BookingDraft()
        self._today = today
        self._errors: ValidationErrors = {}

    @property
    def errors(self) -> ValidationErrors:
        return dict(self._errors)

    def validate_all(self) -> ValidationErrors:
        today = self._today()
        errors: ValidationErrors = {}
        for name in BookingDraft.field_names():
            message = validate_field(self.draft, name, today=today)
            if message:
                errors[name] = message
        self._errors = errors
        return dict(errors)

    def is_valid(self) -> bool:
        return not self.validate_all()

    def update_field(self, name: str, value: str) -> str | None:
        """Set one field and revalidate it. Raises KeyError for unknown field names."""
        self.draft.set(name, value)
        message = validate_field(self.draft, name, today=self._today())
        if message:
            self._errors[name] = message
        else:
            self._errors.pop(name, None)
        return message

    def update_fields(self, values: Mapping[str, str]) -> ValidationErrors:
        unknown = [name for name in values if name not in BookingDraft.field_names()]
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        for name, value in values.items():
            self.update_field(name, value)
        return self.errors

    def reset(self) -> None:
        self.draft.reset()
        self._errors = {}
