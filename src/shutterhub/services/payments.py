"""Escrow payments for instant bookings."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from shutterhub.domain.bookings import EscrowPayment, InstantBooking
from shutterhub.domain.instant_photo import RequestStatus
from shutterhub.domain.results import ActionResult
from shutterhub.services.bookings import BookingRepository
from shutterhub.services.requests import RequestRepository

logger = logging.getLogger(__name__)

ESCROW_CURRENCY = "jpy"
AUTO_CONFIRM_HOURS = 72


@dataclass(frozen=True)
class PaymentIntent:
    """Client-confirmable payment intent."""

    id: str
    client_secret: str | None


@dataclass(frozen=True)
class StripeSubscription:
    """Subscription as returned by the payments provider."""

    id: str
    status: str
    client_secret: str | None = None
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None


class PaymentsClient(Protocol):
    """Interface to the payments provider."""

    def find_customer(self, user_id: UUID) -> str | None:
        """Return the customer id tagged with this user id, if any."""

    def create_customer(self, user_id: UUID, email: str, name: str | None) -> str:
        """Create a customer and return its id."""

    def create_subscription(
        self, customer_id: str, price_id: str, metadata: dict[str, str]
    ) -> StripeSubscription:
        """Create an incomplete subscription awaiting client confirmation."""

    def cancel_subscription_at_period_end(self, subscription_id: str) -> None:
        """Stop renewal at the end of the current period."""

    def create_escrow_intent(
        self, amount: int, currency: str, metadata: dict[str, str]
    ) -> PaymentIntent:
        """Create a manual-capture payment intent."""

    def capture_payment_intent(self, payment_intent_id: str) -> None:
        """Collect the funds held by a manual-capture intent."""


class EscrowRepository(Protocol):
    """Persistence interface for escrow payments."""

    def get_escrow_for_booking(self, booking_id: UUID) -> EscrowPayment | None:
        """Return the escrow row for a booking, if present."""

    def upsert_escrow(
        self,
        existing_id: UUID | None,
        booking: InstantBooking,
        payment_intent_id: str,
        auto_confirm_at: datetime,
    ) -> EscrowPayment:
        """Create or replace the pending escrow for a booking."""

    def mark_escrowed(
        self, payment_intent_id: str, escrowed_at: datetime
    ) -> EscrowPayment | None:
        """Mark the escrow behind a payment intent as funded."""

    def mark_delivered(
        self, booking_id: UUID, delivered_at: datetime
    ) -> EscrowPayment | None:
        """Set the delivery status of the booking's escrow to delivered."""

    def complete_escrow(
        self, escrow_id: UUID, completed_at: datetime
    ) -> EscrowPayment | None:
        """Move a funded escrow to completed; None unless it was escrowed."""

    def mark_disputed(
        self, escrow_id: UUID, reason: str, disputed_at: datetime
    ) -> None:
        """Flag a funded escrow as disputed."""

    def list_due_for_auto_confirm(
        self, now: datetime, limit: int
    ) -> list[EscrowPayment]:
        """Return funded, delivered escrows whose auto-confirm time has passed."""


@dataclass(frozen=True)
class EscrowCheckout:
    """What the client needs to confirm an escrow payment."""

    client_secret: str | None
    escrow: EscrowPayment


@dataclass
class EscrowService:
    """Holds guest payments until delivery is confirmed."""

    escrow_repository: EscrowRepository
    booking_repository: BookingRepository
    request_repository: RequestRepository
    payments_client: PaymentsClient
    auto_confirm_hours: int = AUTO_CONFIRM_HOURS

    def create_escrow_payment(
        self, booking_id: UUID, guest_phone: str
    ) -> ActionResult[EscrowCheckout]:
        """Create the payment intent and pending escrow for a booking."""
        try:
            booking = self.booking_repository.get_booking(booking_id)
            if booking is None:
                return ActionResult.fail("Booking not found", "not_found")
            existing = self.escrow_repository.get_escrow_for_booking(booking_id)
            if existing is not None and existing.escrow_status != "pending":
                return ActionResult.fail("Payment was already processed", "conflict")
            intent = self.payments_client.create_escrow_intent(
                amount=booking.total_amount,
                currency=ESCROW_CURRENCY,
                metadata={
                    "booking_id": str(booking_id),
                    "type": "instant_photo_escrow",
                    "guest_phone": guest_phone,
                },
            )
            escrow = self.escrow_repository.upsert_escrow(
                existing_id=existing.id if existing else None,
                booking=booking,
                payment_intent_id=intent.id,
                auto_confirm_at=datetime.now(tz=UTC)
                + timedelta(hours=self.auto_confirm_hours),
            )
        except Exception:
            logger.exception(
                "Failed to create escrow payment", extra={"booking_id": str(booking_id)}
            )
            return ActionResult.fail("Failed to create the payment", "unexpected")
        logger.info(
            "Escrow payment created",
            extra={"booking_id": str(booking_id), "payment_intent_id": intent.id},
        )
        return ActionResult.ok(
            EscrowCheckout(client_secret=intent.client_secret, escrow=escrow)
        )

    def confirm_escrow_payment(
        self, payment_intent_id: str
    ) -> ActionResult[EscrowPayment]:
        """Record a successful payment and start the shoot."""
        try:
            escrow = self.escrow_repository.mark_escrowed(
                payment_intent_id, datetime.now(tz=UTC)
            )
        except Exception:
            logger.exception("Failed to confirm escrow payment")
            return ActionResult.fail("Failed to confirm the payment", "unexpected")
        if escrow is None:
            return ActionResult.fail("Payment not found", "not_found")

        try:
            booking = self.booking_repository.mark_paid(escrow.booking_id)
            if booking is not None:
                self.request_repository.compare_and_set(
                    booking.request_id,
                    expected={"status": RequestStatus.MATCHED},
                    changes={
                        "status": RequestStatus.IN_PROGRESS,
                        "updated_at": datetime.now(tz=UTC),
                    },
                )
        except Exception:
            logger.exception(
                "Payment confirmed but booking or request update failed",
                extra={"booking_id": str(escrow.booking_id)},
            )
        return ActionResult.ok(escrow)
