"""Booking creation for confirmed instant photo matches."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from shutterhub.domain.bookings import FeeSplit, InstantBooking
from shutterhub.domain.instant_photo import InstantPhotoRequest, RequestStatus
from shutterhub.domain.results import ActionResult
from shutterhub.services.requests import RequestRepository

logger = logging.getLogger(__name__)

PHOTOGRAPHER_STATUS_UPDATES = frozenset(
    {RequestStatus.IN_PROGRESS, RequestStatus.COMPLETED, RequestStatus.CANCELLED}
)
ACTIVE_STATUSES = frozenset({RequestStatus.MATCHED, RequestStatus.IN_PROGRESS})


class BookingRepository(Protocol):
    """Persistence interface for instant bookings."""

    def get_booking(self, booking_id: UUID) -> InstantBooking | None:
        """Return a booking by id, if present."""

    def get_booking_for_request(self, request_id: UUID) -> InstantBooking | None:
        """Return the booking created for a request, if any."""

    def create_booking(
        self,
        request_id: UUID,
        photographer_id: UUID,
        split: FeeSplit,
        start_time: datetime | None,
    ) -> InstantBooking:
        """Insert a booking with payment status pending."""

    def mark_paid(self, booking_id: UUID) -> InstantBooking | None:
        """Set the payment status to paid and return the booking."""

    def record_delivery(
        self,
        booking_id: UUID,
        photo_count: int,
        delivery_url: str | None,
        end_time: datetime,
    ) -> None:
        """Store delivery details on the booking."""

    def record_review(
        self, booking_id: UUID, rating: int | None, review: str | None
    ) -> None:
        """Store the guest rating and mark the booking paid."""


def compute_fee_split(total_amount: int, fee_percent: int = 10) -> FeeSplit:
    """Split a total into the floored platform fee and the remainder."""
    platform_fee = total_amount * fee_percent // 100
    return FeeSplit(
        total_amount=total_amount,
        platform_fee=platform_fee,
        photographer_earnings=total_amount - platform_fee,
    )


@dataclass
class BookingService:
    """Creates bookings and applies photographer-driven status updates."""

    repository: BookingRepository
    request_repository: RequestRepository
    platform_fee_percent: int = 10

    def finalize(
        self,
        request: InstantPhotoRequest,
        photographer_id: UUID,
        start_time: datetime | None = None,
    ) -> ActionResult[InstantBooking]:
        """Create the booking for a request, at most once per request."""
        try:
            existing = self.repository.get_booking_for_request(request.id)
            if existing is not None:
                logger.info(
                    "Booking already exists for request",
                    extra={
                        "request_id": str(request.id),
                        "booking_id": str(existing.id),
                    },
                )
                return ActionResult.ok(existing)
            booking = self.repository.create_booking(
                request_id=request.id,
                photographer_id=photographer_id,
                split=compute_fee_split(request.budget, self.platform_fee_percent),
                start_time=start_time,
            )
        except Exception:
            logger.exception(
                "Failed to create booking", extra={"request_id": str(request.id)}
            )
            return ActionResult.fail("Failed to create the booking", "unexpected")
        return ActionResult.ok(booking)

    def update_request_status(
        self, request_id: UUID, photographer_id: UUID, status: RequestStatus
    ) -> ActionResult[None]:
        """Move a matched request forward on behalf of its photographer."""
        if status not in PHOTOGRAPHER_STATUS_UPDATES:
            return ActionResult.fail(f"Unsupported status: {status.value}")
        try:
            request = self.request_repository.get_request(request_id)
        except Exception:
            logger.exception("Failed to load request")
            return ActionResult.unexpected()
        if request is None or request.matched_photographer_id != photographer_id:
            return ActionResult.fail("Request not found", "not_found")
        if request.status not in ACTIVE_STATUSES:
            return ActionResult.fail(
                f"Request is already {request.status.value}", "conflict"
            )

        now = datetime.now(tz=UTC)
        changes: dict[str, object] = {
            "status": status,
            "updated_at": now,
            "completed_at": now if status == RequestStatus.COMPLETED else None,
        }
        try:
            updated = self.request_repository.compare_and_set(
                request_id,
                expected={
                    "status": request.status,
                    "matched_photographer_id": photographer_id,
                },
                changes=changes,
            )
        except Exception:
            logger.exception("Failed to update request status")
            return ActionResult.fail("Failed to update the status", "unexpected")
        if updated is None:
            return ActionResult.fail("Request status changed, try again", "conflict")

        if status == RequestStatus.COMPLETED:
            booking = self.finalize(updated, photographer_id, start_time=now)
            if not booking.success:
                logger.warning(
                    "Status updated but booking creation failed",
                    extra={"request_id": str(request_id)},
                )
        return ActionResult.ok()
