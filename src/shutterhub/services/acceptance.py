"""Acceptance state machine for instant photo requests.

A request moves ``pending -> photographer_accepted -> matched``. A photographer
claims a pending request, then the guest approves or rejects the claim within
the timeout window. Reject and timeout put the request back to ``pending``.

There are no locks. Every transition is a compare-and-swap on the request row:
the update only lands when the guarded columns still hold the values the
transition was validated against, so the database decides the winner of a
race. A lost accept race is re-read and classified, and retried under the
same guard a bounded number of times.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from shutterhub.domain.bookings import InstantBooking
from shutterhub.domain.instant_photo import (
    InstantPhotoRequest,
    RequestStatus,
    ResponseType,
)
from shutterhub.domain.results import ActionResult
from shutterhub.services.bookings import BookingService
from shutterhub.services.notifications import NotificationService
from shutterhub.services.requests import RequestRepository, ResponseRepository

logger = logging.getLogger(__name__)

DEFAULT_ARRIVAL_MINUTES = 15
GUEST_REJECTED_REASON = "Rejected by guest"

ERROR_NOT_FOUND = "Request not found"
ERROR_ALREADY_MATCHED = "This request has already been matched with a photographer"
ERROR_ACCEPTED_BY_OTHER = "This request was already accepted by another photographer"
ERROR_ALREADY_RESPONDED = "You already responded to this request and cannot accept it"
ERROR_NOT_ACCEPTABLE = "This request can no longer be accepted"
ERROR_ACCEPT_CONTENDED = "The request is being updated, please try again"
ERROR_NOT_AWAITING_GUEST = (
    "This photographer has not accepted the request or it was already approved"
)
ERROR_APPROVAL_EXPIRED = "The approval window expired and the request was reopened"
ERROR_ALREADY_APPROVED_OR_EXPIRED = "The request was already approved or has expired"


def _cleared_claim() -> dict[str, object]:
    return {
        "status": RequestStatus.PENDING,
        "pending_photographer_id": None,
        "photographer_accepted_at": None,
        "photographer_timeout_at": None,
    }


@dataclass(frozen=True)
class Approval:
    """Outcome of a guest approving a photographer."""

    request: InstantPhotoRequest
    booking: InstantBooking | None


@dataclass
class AcceptanceService:
    """Photographer accept/decline and guest approve/reject transitions."""

    request_repository: RequestRepository
    response_repository: ResponseRepository
    booking_service: BookingService
    notification_service: NotificationService
    timeout_minutes: int = 10
    max_attempts: int = 3

    def respond(  # noqa: PLR0913
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
        estimated_arrival_time: int | None = None,
    ) -> ActionResult[None]:
        """Record a photographer's accept or decline."""
        if response_type == ResponseType.ACCEPT:
            return self._accept(request_id, photographer_id, estimated_arrival_time)
        return self._decline(request_id, photographer_id, decline_reason)

    def approve_photographer(
        self, request_id: UUID, photographer_id: UUID
    ) -> ActionResult[Approval]:
        """Confirm the pending photographer and create the booking."""
        checked = self._load_awaiting_guest(request_id, photographer_id)
        if not checked.success or checked.data is None:
            return ActionResult.fail(checked.error or ERROR_NOT_FOUND, checked.code)

        now = datetime.now(tz=UTC)
        try:
            matched = self.request_repository.compare_and_set(
                request_id,
                expected={
                    "status": RequestStatus.PHOTOGRAPHER_ACCEPTED,
                    "pending_photographer_id": photographer_id,
                },
                changes={
                    "status": RequestStatus.MATCHED,
                    "matched_photographer_id": photographer_id,
                    "guest_approved_at": now,
                    "matched_at": now,
                },
            )
        except Exception:
            logger.exception("Approval update failed")
            return ActionResult.fail("Failed to approve the photographer", "unexpected")
        if matched is None:
            return ActionResult.fail(ERROR_ALREADY_APPROVED_OR_EXPIRED, "conflict")

        booking = self.booking_service.finalize(matched, photographer_id)
        if not booking.success:
            logger.warning(
                "Approval succeeded but booking creation failed",
                extra={"request_id": str(request_id)},
            )
        booking_id = booking.data.id if booking.data else None
        notified = self.notification_service.notify_match_found(
            matched, photographer_id, booking_id
        )
        if not notified.success:
            logger.warning(
                "Match notification not sent",
                extra={"request_id": str(request_id), "reason": notified.error},
            )
        logger.info(
            "Photographer approved",
            extra={
                "request_id": str(request_id),
                "photographer_id": str(photographer_id),
            },
        )
        return ActionResult.ok(Approval(request=matched, booking=booking.data))

    def reject_photographer(
        self, request_id: UUID, photographer_id: UUID
    ) -> ActionResult[None]:
        """Release the claim and reopen the request."""
        checked = self._load_awaiting_guest(request_id, photographer_id)
        if not checked.success:
            return ActionResult.fail(checked.error or ERROR_NOT_FOUND, checked.code)

        try:
            reopened = self.request_repository.compare_and_set(
                request_id,
                expected={
                    "status": RequestStatus.PHOTOGRAPHER_ACCEPTED,
                    "pending_photographer_id": photographer_id,
                },
                changes=_cleared_claim(),
            )
        except Exception:
            logger.exception("Reject update failed")
            return ActionResult.fail("Failed to reject the photographer", "unexpected")
        if reopened is None:
            return ActionResult.fail(ERROR_ALREADY_APPROVED_OR_EXPIRED, "conflict")

        try:
            self.response_repository.update_response(
                request_id,
                photographer_id,
                ResponseType.DECLINE,
                decline_reason=GUEST_REJECTED_REASON,
            )
        except Exception:
            logger.warning(
                "Failed to mark response as declined",
                exc_info=True,
                extra={"request_id": str(request_id)},
            )
        return ActionResult.ok()

    def check_photographer_timeout(
        self, request_id: UUID | None = None
    ) -> ActionResult[int]:
        """Revert expired claims to pending.

        With a request id only that request is checked and the count is 0 or
        1. Without one, every expired claim is reverted in a single guarded
        bulk update.
        """
        now = datetime.now(tz=UTC)
        if request_id is None:
            try:
                count = self.request_repository.revert_expired_claims(now)
            except Exception:
                logger.exception("Bulk timeout sweep failed")
                return ActionResult.fail("Failed to process timeouts", "unexpected")
            if count:
                logger.info("Reverted expired claims", extra={"count": count})
            return ActionResult.ok(count)

        try:
            request = self.request_repository.get_request(request_id)
        except Exception:
            logger.exception("Failed to load request")
            return ActionResult.unexpected()
        if request is None:
            return ActionResult.fail(ERROR_NOT_FOUND, "not_found")
        if not _claim_expired(request, now):
            return ActionResult.ok(0)

        try:
            reverted = self.request_repository.compare_and_set(
                request_id,
                expected={
                    "status": RequestStatus.PHOTOGRAPHER_ACCEPTED,
                    "pending_photographer_id": request.pending_photographer_id,
                },
                changes=_cleared_claim(),
            )
        except Exception:
            logger.exception("Timeout update failed")
            return ActionResult.fail("Failed to process timeouts", "unexpected")
        if reverted is None:
            return ActionResult.ok(0)
        logger.info("Claim timed out", extra={"request_id": str(request_id)})
        return ActionResult.ok(1)

    def _accept(
        self,
        request_id: UUID,
        photographer_id: UUID,
        estimated_arrival_time: int | None,
    ) -> ActionResult[None]:
        try:
            request = self.request_repository.get_request(request_id)
            previous = self.response_repository.get_response(
                request_id, photographer_id
            )
        except Exception:
            logger.exception("Failed to load request for accept")
            return ActionResult.unexpected()
        if request is None:
            return ActionResult.fail(ERROR_NOT_FOUND, "not_found")
        if request.status == RequestStatus.MATCHED:
            return ActionResult.fail(ERROR_ALREADY_MATCHED, "conflict")
        if request.is_claimed_by_other(photographer_id):
            return ActionResult.fail(ERROR_ACCEPTED_BY_OTHER, "conflict")
        if previous is not None:
            logger.warning(
                "Photographer tried to accept again",
                extra={
                    "request_id": str(request_id),
                    "photographer_id": str(photographer_id),
                    "previous_response": previous.response_type.value,
                },
            )
            return ActionResult.fail(ERROR_ALREADY_RESPONDED, "conflict")

        claimed = self._claim(request_id, photographer_id)
        if not claimed.success:
            error = claimed.error or ERROR_NOT_ACCEPTABLE
            return ActionResult.fail(error, claimed.code)

        try:
            self.response_repository.create_response(
                request_id,
                photographer_id,
                ResponseType.ACCEPT,
                estimated_arrival_time=estimated_arrival_time
                or DEFAULT_ARRIVAL_MINUTES,
            )
        except Exception:
            logger.warning(
                "Failed to record accept response",
                exc_info=True,
                extra={"request_id": str(request_id)},
            )
        return ActionResult.ok()

    def _claim(
        self, request_id: UUID, photographer_id: UUID
    ) -> ActionResult[InstantPhotoRequest]:
        for attempt in range(1, self.max_attempts + 1):
            now = datetime.now(tz=UTC)
            try:
                claimed = self.request_repository.compare_and_set(
                    request_id,
                    expected={"status": RequestStatus.PENDING},
                    changes={
                        "status": RequestStatus.PHOTOGRAPHER_ACCEPTED,
                        "pending_photographer_id": photographer_id,
                        "photographer_accepted_at": now,
                        "photographer_timeout_at": now
                        + timedelta(minutes=self.timeout_minutes),
                    },
                )
                if claimed is not None:
                    logger.info(
                        "Request accepted",
                        extra={
                            "request_id": str(request_id),
                            "photographer_id": str(photographer_id),
                            "attempt": attempt,
                        },
                    )
                    return ActionResult.ok(claimed)
                current = self.request_repository.get_request(request_id)
            except Exception:
                logger.exception("Accept update failed")
                return ActionResult.fail("Failed to accept the request", "unexpected")

            logger.warning(
                "Accept guard matched no row",
                extra={"request_id": str(request_id), "attempt": attempt},
            )
            if current is None:
                return ActionResult.fail(ERROR_NOT_FOUND, "not_found")
            if current.is_claimed_by(photographer_id):
                return ActionResult.ok(current)
            if current.is_claimed_by_other(photographer_id):
                return ActionResult.fail(ERROR_ACCEPTED_BY_OTHER, "conflict")
            if current.status != RequestStatus.PENDING:
                return ActionResult.fail(ERROR_NOT_ACCEPTABLE, "conflict")
        return ActionResult.fail(ERROR_ACCEPT_CONTENDED, "conflict")

    def _decline(
        self, request_id: UUID, photographer_id: UUID, decline_reason: str | None
    ) -> ActionResult[None]:
        try:
            existing = self.response_repository.get_response(
                request_id, photographer_id
            )
            if existing is None:
                self.response_repository.create_response(
                    request_id,
                    photographer_id,
                    ResponseType.DECLINE,
                    decline_reason=decline_reason,
                )
            else:
                self.response_repository.update_response(
                    request_id,
                    photographer_id,
                    ResponseType.DECLINE,
                    decline_reason=decline_reason,
                )
        except Exception:
            logger.exception(
                "Failed to record decline", extra={"request_id": str(request_id)}
            )
            return ActionResult.fail("Failed to record the response", "unexpected")
        return ActionResult.ok()

    def _load_awaiting_guest(
        self, request_id: UUID, photographer_id: UUID
    ) -> ActionResult[InstantPhotoRequest]:
        try:
            request = self.request_repository.get_request(request_id)
        except Exception:
            logger.exception("Failed to load request")
            return ActionResult.unexpected()
        if request is None:
            return ActionResult.fail(ERROR_NOT_FOUND, "not_found")
        if (
            request.status != RequestStatus.PHOTOGRAPHER_ACCEPTED
            or request.pending_photographer_id != photographer_id
        ):
            return ActionResult.fail(ERROR_NOT_AWAITING_GUEST, "conflict")
        if _claim_expired(request, datetime.now(tz=UTC)):
            self.check_photographer_timeout(request_id)
            return ActionResult.fail(ERROR_APPROVAL_EXPIRED, "expired")
        return ActionResult.ok(request)


def _claim_expired(request: InstantPhotoRequest, now: datetime) -> bool:
    return (
        request.status == RequestStatus.PHOTOGRAPHER_ACCEPTED
        and request.photographer_timeout_at is not None
        and request.photographer_timeout_at < now
    )
