"""Checkout step machine: Review Cart -> Booking Details -> Confirmation.

The workflow sequences one CartStore and one BookingFormController for a single
browser session and performs the final booking submission.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from packages.shared.schemas.booking_v1 import (
    BookingItemV1,
    BookingPayloadV1,
    BookingTotalsV1,
)
from services.api.app.checkout.cart import CartStore
from services.api.app.checkout.form import BookingFormController, ValidationErrors
from services.api.app.services.booking_base import (
    BookingRejectedError,
    BookingSubmitError,
    BookingSubmitter,
)

logger = logging.getLogger(__name__)

DEFAULT_SUBMIT_TIMEOUT_SECONDS = 15.0

FIX_ERRORS_MESSAGE = "Please fill all required fields correctly"
SUBMIT_FAILED_MESSAGE = "Booking failed. Please try again."
EMPTY_CART_MESSAGE = "Your cart is empty"


class CheckoutStep(str, Enum):
    REVIEW_CART = "REVIEW_CART"
    BOOKING_DETAILS = "BOOKING_DETAILS"
    CONFIRMATION = "CONFIRMATION"


class SubmissionStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    INVALID = "INVALID"
    FAILED = "FAILED"


class CheckoutStateError(Exception):
    """An action that the current checkout step does not allow."""


@dataclass(frozen=True, slots=True)
class BookingConfirmation:
    booking_id: str
    summary: str
    vendor: str
    total: Decimal
    item_count: int
    confirmed_at: datetime


@dataclass(frozen=True, slots=True)
class SubmissionOutcome:
    status: SubmissionStatus
    message: str
    booking_id: str | None = None
    detail: str | None = None
    errors: ValidationErrors = field(default_factory=dict)


class CheckoutWorkflow:
    def __init__(
        self,
        cart: CartStore | None = None,
        form: BookingFormController | None = None,
        *,
        submit_timeout: float = DEFAULT_SUBMIT_TIMEOUT_SECONDS,
    ) -> None:
        self.cart = cart or CartStore()
        self.form = form or BookingFormController()
        self.submit_timeout = submit_timeout

        self.step = CheckoutStep.REVIEW_CART
        self.submitting = False
        self.confirmation: BookingConfirmation | None = None
        self.last_error: str | None = None

    def ensure_idle(self) -> None:
        if self.submitting:
            raise CheckoutStateError("Booking submission in progress")

    def proceed_to_details(self) -> bool:
        """Move from the cart review to the booking form. False when the cart is empty."""
        self.ensure_idle()
        if self.step != CheckoutStep.REVIEW_CART:
            raise CheckoutStateError(f"Cannot proceed to booking details from {self.step.value}")
        if self.cart.is_empty:
            return False
        self.step = CheckoutStep.BOOKING_DETAILS
        return True

    def back_to_cart(self) -> None:
        # Cart and draft both survive; the user can come back and resume.
        self.ensure_idle()
        if self.step != CheckoutStep.BOOKING_DETAILS:
            raise CheckoutStateError(f"Cannot go back to the cart from {self.step.value}")
        self.step = CheckoutStep.REVIEW_CART

    def clear_cart(self) -> None:
        self.ensure_idle()
        self.cart.clear()
        self.form.reset()
        if self.step == CheckoutStep.BOOKING_DETAILS:
            self.step = CheckoutStep.REVIEW_CART

    def start_over(self) -> None:
        self.ensure_idle()
        if self.step != CheckoutStep.CONFIRMATION:
            raise CheckoutStateError(f"Nothing to start over from {self.step.value}")
        self.step = CheckoutStep.REVIEW_CART
        self.confirmation = None
        self.last_error = None

    def build_payload(self) -> BookingPayloadV1:
        items = [
            BookingItemV1(
                package_id=item.package_id,
                package_name=item.package.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
            )
            for item in self.cart.items
        ]
        return BookingPayloadV1(
            items=items,
            customer=self.form.draft.to_customer(),
            totals=BookingTotalsV1(
                item_count=self.cart.item_count,
                total=self.cart.total,
                original_total=self.cart.original_total,
                savings=self.cart.savings,
            ),
        )

    async def submit(self, submitter: BookingSubmitter) -> SubmissionOutcome:
        self.ensure_idle()
        if self.step != CheckoutStep.BOOKING_DETAILS:
            raise CheckoutStateError(f"Cannot submit a booking from {self.step.value}")

        errors = self.form.validate_all()
        if errors:
            return SubmissionOutcome(
                status=SubmissionStatus.INVALID,
                message=FIX_ERRORS_MESSAGE,
                errors=errors,
            )

        if self.cart.is_empty:
            self.last_error = EMPTY_CART_MESSAGE
            return SubmissionOutcome(status=SubmissionStatus.FAILED, message=EMPTY_CART_MESSAGE)

        payload = self.build_payload()
        self.submitting = True
        self.last_error = None
        logger.info(
            "Submitting booking via %s: %d item(s), total %s",
            submitter.vendor,
            payload.totals.item_count,
            payload.totals.total,
        )
        try:
            result = await asyncio.wait_for(
                submitter.submit(payload), timeout=self.submit_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Booking submission timed out after %ss", self.submit_timeout)
            return self._fail("Booking endpoint did not respond in time")
        except BookingRejectedError as e:
            logger.warning("Booking rejected: %s", e.reason)
            return self._fail(e.reason)
        except BookingSubmitError as e:
            logger.warning("Booking submission failed: %s", e)
            return self._fail(None)
        except Exception:
            logger.exception("Unexpected error while submitting booking")
            return self._fail(None)
        finally:
            self.submitting = False

        self.confirmation = BookingConfirmation(
            booking_id=result.booking_id,
            summary=result.summary,
            vendor=submitter.vendor,
            total=payload.totals.total,
            item_count=payload.totals.item_count,
            confirmed_at=datetime.utcnow(),
        )
        self.cart.clear()
        self.form.reset()
        self.step = CheckoutStep.CONFIRMATION
        logger.info("Booking confirmed: %s", result.booking_id)

        return SubmissionOutcome(
            status=SubmissionStatus.CONFIRMED,
            message=f"Booking confirmed! Booking ID: {result.booking_id}",
            booking_id=result.booking_id,
        )

    def _fail(self, detail: str | None) -> SubmissionOutcome:
        self.last_error = SUBMIT_FAILED_MESSAGE
        return SubmissionOutcome(
            status=SubmissionStatus.FAILED,
            message=SUBMIT_FAILED_MESSAGE,
            detail=detail,
        )
