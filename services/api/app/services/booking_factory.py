from __future__ import annotations

import os

from services.api.app.config import env_float
from services.api.app.services.booking_base import BookingSubmitter
from services.api.app.services.booking_mock import MockBookingSubmitter


def get_booking_submitter() -> BookingSubmitter:
    """Select the booking submitter.

    Defaults to the mock submitter so tests and local dev never call a real endpoint.
    Set LABCART_BOOKING_SUBMITTER=http and LABCART_BOOKING_URL to post real bookings.
    """

    provider = os.getenv("LABCART_BOOKING_SUBMITTER", "mock").strip().lower()

    if provider in ("mock", "demo"):
        return MockBookingSubmitter(
            delay_seconds=env_float("LABCART_MOCK_BOOKING_DELAY_SECONDS", 0.0)
        )

    if provider == "http":
        from services.api.app.services.booking_http import HttpBookingSubmitter

        return HttpBookingSubmitter.from_env()

    raise ValueError(f"Unknown LABCART_BOOKING_SUBMITTER={provider!r}. Expected mock or http.")
