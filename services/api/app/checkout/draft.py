from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date

from packages.shared.schemas.booking_v1 import BookingCustomerV1


@dataclass(slots=True)
class BookingDraft:
    """In-progress checkout form. Values are kept exactly as entered."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    age: str = ""
    gender: str = ""

    street_address: str = ""
    city: str = ""
    state: str = ""
    pin_code: str = ""
    landmark: str = ""

    preferred_date: str = ""
    time_slot: str = ""
    collection_type: str = ""
    special_instructions: str = ""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def set(self, name: str, value: str) -> None:
        if name not in self.field_names():
            raise KeyError(name)
        setattr(self, name, value)

    def reset(self) -> None:
        for name in self.field_names():
            setattr(self, name, "")

    def is_blank(self) -> bool:
        return all(getattr(self, name) == "" for name in self.field_names())

    def as_dict(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.field_names()}

    def to_customer(self) -> BookingCustomerV1:
        # Only call on a draft that passed validation.
        return BookingCustomerV1(
            full_name=self.full_name.strip(),
            email=self.email.strip(),
            phone=self.phone.strip(),
            age=int(self.age.strip()),
            gender=self.gender,
            street_address=self.street_address.strip(),
            city=self.city.strip(),
            state=self.state,
            pin_code=self.pin_code.strip(),
            landmark=self.landmark.strip() or None,
            preferred_date=date.fromisoformat(self.preferred_date.strip()),
            time_slot=self.time_slot,
            collection_type=self.collection_type,
            special_instructions=self.special_instructions.strip() or None,
        )
