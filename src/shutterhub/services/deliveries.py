"""Photo delivery and release of escrowed payments."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from shutterhub.domain.bookings import (
    DeliveryReview,
    EscrowPayment,
    NewPhotoDelivery,
    PhotoDelivery,
)
from shutterhub.domain.instant_photo import InstantPhotoRequest, RequestStatus
from shutterhub.domain.results import ActionResult
from shutterhub.services.bookings import ACTIVE_STATUSES, BookingRepository
from shutterhub.services.notifications import NotificationService
from shutterhub.services.payments import EscrowRepository, PaymentsClient
from shutterhub.services.requests import RequestRepository

logger = logging.getLogger(__name__)

DOWNLOAD_VALID_DAYS = 30
AUTO_CONFIRM_BATCH_SIZE = 100
DEFAULT_DISPUTE_REASON = "Guest is not satisfied with the delivery"

_COMPLETABLE_STATUSES = ACTIVE_STATUSES | {RequestStatus.DELIVERED}


class DeliveryRepository(Protocol):
    """Persistence interface for photo deliveries and reviews."""

    def save_delivery(
        self,
        booking_id: UUID,
        data: NewPhotoDelivery,
        delivered_at: datetime,
        download_expires_at: datetime,
    ) -> PhotoDelivery:
        """Insert or replace the delivery for a booking."""

    def mark_confirmed(self, booking_id: UUID, confirmed_at: datetime) -> None:
        """Stamp the delivery as confirmed by the guest."""

    def create_review(self, booking_id: UUID, review: DeliveryReview) -> None:
        """Store the guest's detailed review."""


@dataclass
class DeliveryService:
    """Hands photos to the guest and captures the escrow once accepted.

    Funds are captured either when the guest confirms the delivery or, for
    deliveries left unconfirmed, by the auto-confirm sweep after the escrow's
    ``auto_confirm_at`` has passed.
    """

    repository: DeliveryRepository
    escrow_repository: EscrowRepository
    booking_repository: BookingRepository
    request_repository: RequestRepository
    payments_client: PaymentsClient
    notification_service: NotificationService

    def deliver_photos(
        self, booking_id: UUID, photographer_id: UUID, data: NewPhotoDelivery
    ) -> ActionResult[PhotoDelivery]:
        """Record the delivery and mark the request delivered."""
        if data.photo_count <= 0:
            return ActionResult.fail("Photo count must be positive")
        if not (data.delivery_url or data.external_url):
            return ActionResult.fail("A delivery URL is required")
        try:
            booking = self.booking_repository.get_booking(booking_id)
        except Exception:
            logger.exception("Failed to load booking")
            return ActionResult.unexpected()
        if booking is None or booking.photographer_id != photographer_id:
            return ActionResult.fail("Booking not found", "not_found")

        now = datetime.now(tz=UTC)
        try:
            delivery = self.repository.save_delivery(
                booking_id,
                data,
                delivered_at=now,
                download_expires_at=now + timedelta(days=DOWNLOAD_VALID_DAYS),
            )
        except Exception:
            logger.exception(
                "Failed to record photo delivery", extra={"booking_id": str(booking_id)}
            )
            return ActionResult.fail(
                "Failed to record the photo delivery", "unexpected"
            )

        try:
            self.escrow_repository.mark_delivered(booking_id, now)
            self.booking_repository.record_delivery(
                booking_id,
                photo_count=data.photo_count,
                delivery_url=data.external_url or data.delivery_url,
                end_time=now,
            )
        except Exception:
            logger.exception(
                "Delivery recorded but escrow or booking update failed",
                extra={"booking_id": str(booking_id)},
            )

        request = self._advance_request(
            booking.request_id,
            allowed=ACTIVE_STATUSES,
            changes={"status": RequestStatus.DELIVERED, "updated_at": now},
        )
        if request is not None:
            self.notification_service.notify_photos_delivered(
                request, photographer_id, booking_id, data.photo_count
            )
        logger.info(
            "Photos delivered",
            extra={"booking_id": str(booking_id), "photo_count": data.photo_count},
        )
        return ActionResult.ok(delivery)

    def confirm_delivery(
        self, booking_id: UUID, review: DeliveryReview
    ) -> ActionResult[EscrowPayment]:
        """Release the escrow on a satisfied review, or open a dispute."""
        try:
            escrow = self.escrow_repository.get_escrow_for_booking(booking_id)
        except Exception:
            logger.exception("Failed to load escrow payment")
            return ActionResult.unexpected()
        if escrow is None:
            return ActionResult.fail("Escrow payment not found", "not_found")
        if escrow.escrow_status != "escrowed":
            return ActionResult.fail("Payment is not held in escrow", "conflict")

        now = datetime.now(tz=UTC)
        if not review.is_satisfied:
            reason = ", ".join(review.issues) or DEFAULT_DISPUTE_REASON
            try:
                self.escrow_repository.mark_disputed(escrow.id, reason, now)
            except Exception:
                logger.exception("Failed to open dispute")
                return ActionResult.fail("Failed to open a dispute", "unexpected")
            logger.info("Dispute opened", extra={"booking_id": str(booking_id)})
            return ActionResult.fail(
                "A dispute has been filed. Support will follow up.", "disputed"
            )

        try:
            self.payments_client.capture_payment_intent(escrow.stripe_payment_intent_id)
        except Exception:
            logger.exception(
                "Failed to capture escrow payment",
                extra={"booking_id": str(booking_id)},
            )
            return ActionResult.fail("Failed to capture the payment", "unexpected")

        completed = self._complete(escrow, now)
        try:
            self.booking_repository.record_review(
                booking_id, review.photographer_rating, review.photographer_review
            )
            self.repository.create_review(booking_id, review)
            self.repository.mark_confirmed(booking_id, now)
        except Exception:
            logger.exception(
                "Escrow released but review recording failed",
                extra={"booking_id": str(booking_id)},
            )
        return ActionResult.ok(completed or escrow)

    def process_auto_confirmations(self) -> ActionResult[int]:
        """Capture every delivered escrow past its auto-confirm time."""
        now = datetime.now(tz=UTC)
        try:
            due = self.escrow_repository.list_due_for_auto_confirm(
                now, AUTO_CONFIRM_BATCH_SIZE
            )
        except Exception:
            logger.exception("Failed to load escrows due for auto-confirmation")
            return ActionResult.fail(
                "Failed to process auto-confirmations", "unexpected"
            )

        processed = 0
        for escrow in due:
            try:
                self.payments_client.capture_payment_intent(
                    escrow.stripe_payment_intent_id
                )
            except Exception:
                logger.exception(
                    "Auto-confirm capture failed", extra={"escrow_id": str(escrow.id)}
                )
                continue
            self._complete(escrow, now)
            try:
                self.booking_repository.mark_paid(escrow.booking_id)
            except Exception:
                logger.exception(
                    "Failed to mark booking paid",
                    extra={"booking_id": str(escrow.booking_id)},
                )
            processed += 1
        if processed:
            logger.info("Auto-confirmed deliveries", extra={"count": processed})
        return ActionResult.ok(processed)

    def _complete(self, escrow: EscrowPayment, now: datetime) -> EscrowPayment | None:
        """Finish a captured escrow and the request behind it; best effort."""
        completed = None
        try:
            completed = self.escrow_repository.complete_escrow(escrow.id, now)
            booking = self.booking_repository.get_booking(escrow.booking_id)
        except Exception:
            logger.exception(
                "Payment captured but escrow completion failed",
                extra={"escrow_id": str(escrow.id)},
            )
            return completed
        if booking is not None:
            self._advance_request(
                booking.request_id,
                allowed=_COMPLETABLE_STATUSES,
                changes={
                    "status": RequestStatus.COMPLETED,
                    "completed_at": now,
                    "updated_at": now,
                },
            )
        return completed

    def _advance_request(
        self,
        request_id: UUID,
        allowed: frozenset[RequestStatus],
        changes: dict[str, object],
    ) -> InstantPhotoRequest | None:
        """Move the request on from its current status if that status allows it."""
        try:
            request = self.request_repository.get_request(request_id)
            if request is None or request.status not in allowed:
                return None
            updated = self.request_repository.compare_and_set(
                request_id, expected={"status": request.status}, changes=changes
            )
        except Exception:
            logger.exception(
                "Failed to update request status",
                extra={"request_id": str(request_id)},
            )
            return None
        if updated is None:
            logger.warning(
                "Request changed before its status update",
                extra={"request_id": str(request_id)},
            )
        return updated
