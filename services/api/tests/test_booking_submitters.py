from __future__ import annotations

import asyncio
import json
from datetime import date

import httpx
import pytest
from packages.shared.schemas.booking_v1 import (
    BookingCustomerV1,
    BookingItemV1,
    BookingPayloadV1,
    BookingTotalsV1,
)
from services.api.app.services.booking_base import (
    BookingEndpointUnavailableError,
    BookingRejectedError,
)
from services.api.app.services.booking_factory import get_booking_submitter
from services.api.app.services.booking_http import HttpBookingSubmitter
from services.api.app.services.booking_mock import MockBookingSubmitter

URL = "https://bookings.test/v1/bookings"


def _payload() -> BookingPayloadV1:
    return BookingPayloadV1(
        items=[
            BookingItemV1(
                package_id="PKG-BASIC",
                package_name="Basic Blood Profile",
                quantity=2,
                unit_price="899",
                line_total="1798",
            )
        ],
        customer=BookingCustomerV1(
            full_name="Asha Rao",
            email="asha.rao@example.in",
            phone="9876543210",
            age=34,
            gender="female",
            street_address="12 MG Road",
            city="Bengaluru",
            state="Karnataka",
            pin_code="560001",
            preferred_date=date(2030, 1, 15),
            time_slot="8:00 AM - 10:00 AM",
            collection_type="home",
        ),
        totals=BookingTotalsV1(item_count=2, total="1798", original_total="2598", savings="800"),
    )


def _submitter(handler) -> HttpBookingSubmitter:
    return HttpBookingSubmitter(URL, transport=httpx.MockTransport(handler))


def test_get_booking_submitter_defaults_to_mock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LABCART_BOOKING_SUBMITTER", raising=False)
    submitter = get_booking_submitter()
    assert submitter.vendor == "MOCK_BOOKING"


def test_get_booking_submitter_rejects_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABCART_BOOKING_SUBMITTER", "nope")
    with pytest.raises(ValueError, match="Unknown LABCART_BOOKING_SUBMITTER"):
        get_booking_submitter()


def test_http_submitter_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABCART_BOOKING_SUBMITTER", "http")
    monkeypatch.delenv("LABCART_BOOKING_URL", raising=False)
    with pytest.raises(ValueError, match="LABCART_BOOKING_URL"):
        get_booking_submitter()


def test_http_submitter_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABCART_BOOKING_SUBMITTER", "http")
    monkeypatch.setenv("LABCART_BOOKING_URL", URL)
    submitter = get_booking_submitter()
    assert submitter.vendor == "HTTP_BOOKING"


def test_mock_submitter_summarises_booking() -> None:
    result = asyncio.run(MockBookingSubmitter().submit(_payload()))
    assert result.booking_id.startswith("BK")
    assert "Asha Rao" in result.summary
    assert "2030-01-15" in result.summary
    assert result.booking_id in result.summary


def test_http_submitter_posts_json_payload() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"booking_id": "BK-9001", "summary": "Booked"})

    result = asyncio.run(_submitter(handler).submit(_payload()))

    assert result.booking_id == "BK-9001"
    assert result.summary == "Booked"
    assert seen["method"] == "POST"
    assert seen["body"]["customer"]["preferred_date"] == "2030-01-15"
    assert seen["body"]["items"][0]["quantity"] == 2


def test_http_submitter_accepts_id_key_and_defaults_summary() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 77})

    result = asyncio.run(_submitter(handler).submit(_payload()))
    assert result.booking_id == "77"
    assert result.summary == "Booking ID: 77"


def test_http_submitter_surfaces_rejection_reason() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"error": "Slot unavailable"})

    with pytest.raises(BookingRejectedError) as exc_info:
        asyncio.run(_submitter(handler).submit(_payload()))

    assert exc_info.value.reason == "Slot unavailable"
    assert exc_info.value.status_code == 409


def test_http_submitter_rejects_response_without_booking_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"ok": True})

    with pytest.raises(BookingRejectedError, match="missing a booking id"):
        asyncio.run(_submitter(handler).submit(_payload()))


def test_http_submitter_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BookingEndpointUnavailableError):
        asyncio.run(_submitter(handler).submit(_payload()))
