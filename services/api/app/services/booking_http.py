from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx

from packages.shared.schemas.booking_v1 import BookingPayloadV1
from services.api.app.config import env_float
from services.api.app.services.booking_base import (
    BookingEndpointUnavailableError,
    BookingRejectedError,
    BookingSubmitResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _HttpBookingConfig:
    url: str
    timeout_seconds: float

    @classmethod
    def from_env(cls) -> "_HttpBookingConfig":
        url = (os.getenv("LABCART_BOOKING_URL") or "").strip()
        if not url:
            raise ValueError("LABCART_BOOKING_URL is required when LABCART_BOOKING_SUBMITTER=http")

        return cls(
            url=url,
            timeout_seconds=env_float("LABCART_BOOKING_HTTP_TIMEOUT_SECONDS", 10.0),
        )


def _error_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or f"HTTP {response.status_code}"

    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f"HTTP {response.status_code}"


class HttpBookingSubmitter:
    """Posts the booking payload as JSON to an external booking endpoint.

    Success is any 2xx response whose body carries `booking_id` (or `id`).
    Every other outcome is raised as a BookingSubmitError subclass.
    """

    vendor = "HTTP_BOOKING"

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_env(cls) -> "HttpBookingSubmitter":
        config = _HttpBookingConfig.from_env()
        return cls(config.url, timeout_seconds=config.timeout_seconds)

    async def submit(self, payload: BookingPayloadV1) -> BookingSubmitResult:
        body = payload.model_dump(mode="json")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(self._url, json=body)
        except httpx.HTTPError as e:
            raise BookingEndpointUnavailableError(self._url, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise BookingRejectedError(_error_reason(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise BookingRejectedError(
                "Booking endpoint returned a non-JSON response", status_code=response.status_code
            ) from e

        if not isinstance(data, dict):
            data = {}
        booking_id = data.get("booking_id") or data.get("id")
        if not booking_id:
            raise BookingRejectedError(
                "Booking endpoint response is missing a booking id",
                status_code=response.status_code,
            )

        summary = str(data.get("summary") or f"Booking ID: {booking_id}")
        logger.debug("Booking endpoint accepted booking %s", booking_id)
        return BookingSubmitResult(booking_id=str(booking_id), summary=summary)
