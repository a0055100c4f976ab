from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from packages.shared.schemas.booking_v1 import BookingPayloadV1


class BookingSubmitError(Exception):
    """Base class for booking submission errors."""


class BookingRejectedError(BookingSubmitError):
    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Booking rejected by endpoint (status={status_code}): {reason}")
        self.reason = reason
        self.status_code = status_code


class BookingEndpointUnavailableError(BookingSubmitError):
    def __init__(self, url: str, cause: str) -> None:
        super().__init__(f"Booking endpoint unreachable at {url}: {cause}")
        self.url = url


@dataclass(frozen=True, slots=True)
class BookingSubmitResult:
    booking_id: str
    summary: str


class BookingSubmitter(Protocol):
    vendor: str

    async def submit(self, payload: BookingPayloadV1) -> BookingSubmitResult: ...
