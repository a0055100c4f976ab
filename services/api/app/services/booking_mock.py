from __future__ import annotations

import asyncio
import random
import time

from packages.shared.schemas.booking_v1 import BookingPayloadV1
from services.api.app.services.booking_base import BookingSubmitResult


class MockBookingSubmitter:
    vendor = "MOCK_BOOKING"

    def __init__(self, delay_seconds: float = 0.0) -> None:
        self._delay_seconds = delay_seconds

    async def submit(self, payload: BookingPayloadV1) -> BookingSubmitResult:
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)

        booking_id = f"BK{int(time.time() * 1000)}{random.randint(0, 999)}"
        customer = payload.customer
        summary = (
            f"Booked {payload.totals.item_count} test package(s) for {customer.full_name} "
            f"on {customer.preferred_date.isoformat()} ({customer.time_slot}, "
            f"{customer.collection_type} collection). Booking ID: {booking_id}"
        )
        return BookingSubmitResult(booking_id=booking_id, summary=summary)
