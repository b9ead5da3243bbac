"""Instant photo request lifecycle."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from shutterhub.domain.geo import haversine_distance
from shutterhub.domain.instant_photo import (
    InstantPhotoRequest,
    NewInstantPhotoRequest,
    PhotographerResponse,
    RequestStatus,
    ResponseType,
)
from shutterhub.domain.results import ActionResult
from shutterhub.services.guest_usage import GuestUsageService
from shutterhub.services.matching import MatchingService
from shutterhub.services.presence import LocationRepository

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_RADIUS_METERS = 10_000
PENDING_SCAN_LIMIT = 50
PHOTOGRAPHER_INBOX_LIMIT = 20


class RequestRepository(Protocol):
    """Persistence interface for instant photo requests."""

    def create_request(
        self, data: NewInstantPhotoRequest, expires_at: datetime
    ) -> InstantPhotoRequest:
        """Insert a pending request and return it."""

    def get_request(self, request_id: UUID) -> InstantPhotoRequest | None:
        """Return a request by id, if present."""

    def list_by_guest_phone(
        self, guest_phone: str, limit: int
    ) -> list[InstantPhotoRequest]:
        """Return a guest's requests, newest first."""

    def list_claimed_by(
        self, photographer_id: UUID, limit: int
    ) -> list[InstantPhotoRequest]:
        """Return requests with this photographer as pending or matched."""

    def list_by_status(
        self, status: RequestStatus, limit: int
    ) -> list[InstantPhotoRequest]:
        """Return requests in a status, newest first."""

    def compare_and_set(
        self,
        request_id: UUID,
        expected: dict[str, object],
        changes: dict[str, object],
    ) -> InstantPhotoRequest | None:
        """Apply changes only if every expected column still matches.

        Returns the updated request, or None when the guard matched no row.
        """

    def revert_expired_claims(self, now: datetime) -> int:
        """Revert every accepted claim whose timeout passed; return the count."""

    def expire_old_requests(self) -> int:
        """Run the expiry procedure and return the number of rows expired."""


class ResponseRepository(Protocol):
    """Persistence interface for photographer responses."""

    def get_response(
        self, request_id: UUID, photographer_id: UUID
    ) -> PhotographerResponse | None:
        """Return the response row for the pair, if present."""

    def create_response(  # noqa: PLR0913
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
        estimated_arrival_time: int | None = None,
    ) -> None:
        """Insert a response row."""

    def update_response(
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
    ) -> None:
        """Update the response row for the pair."""

    def list_declined_request_ids(self, photographer_id: UUID) -> set[UUID]:
        """Return ids of requests the photographer declined."""


@dataclass
class RequestLifecycleService:
    """Creates, lists and expires instant photo requests."""

    request_repository: RequestRepository
    response_repository: ResponseRepository
    location_repository: LocationRepository
    guest_usage_service: GuestUsageService
    matching_service: MatchingService
    request_ttl_days: int = 3

    def create(self, data: NewInstantPhotoRequest) -> ActionResult[InstantPhotoRequest]:
        """Create a request after the usage check and kick off matching."""
        usage = self.guest_usage_service.check_usage(data.guest_phone)
        if not usage.success or usage.data is None:
            return ActionResult.fail(
                usage.error or "Failed to check the usage limit",
                usage.code or "unexpected",
            )
        if not usage.data.can_use:
            count = usage.data.usage_count
            limit = self.guest_usage_service.monthly_limit
            return ActionResult.fail(
                f"Monthly usage limit ({limit}) reached. Current usage {count}/{limit}",
                "limit_exceeded",
            )

        expires_at = datetime.now(tz=UTC) + timedelta(days=self.request_ttl_days)
        try:
            request = self.request_repository.create_request(data, expires_at)
        except Exception:
            logger.exception("Failed to create instant photo request")
            return ActionResult.fail("Failed to create the request", "unexpected")

        self.guest_usage_service.record_usage(
            data.guest_phone, data.guest_email, request.id
        )
        match = self.matching_service.auto_match(request.id)
        if match.success and match.data is not None:
            logger.info(
                "Auto-match finished",
                extra={"request_id": str(request.id), "result": match.data.message},
            )
        return ActionResult.ok(request)

    def get_by_id(self, request_id: UUID) -> ActionResult[InstantPhotoRequest]:
        """Return a single request."""
        try:
            request = self.request_repository.get_request(request_id)
        except Exception:
            logger.exception("Failed to load request")
            return ActionResult.unexpected()
        if request is None:
            return ActionResult.fail("Request not found", "not_found")
        return ActionResult.ok(request)

    def get_history_for_guest(
        self, guest_phone: str, limit: int = 10
    ) -> ActionResult[list[InstantPhotoRequest]]:
        """Return a guest's most recent requests."""
        try:
            requests = self.request_repository.list_by_guest_phone(guest_phone, limit)
        except Exception:
            logger.exception("Failed to load guest history")
            return ActionResult.unexpected()
        return ActionResult.ok(requests)

    def expire_old_requests(self) -> ActionResult[int]:
        """Expire stale requests; meant for an external scheduler."""
        try:
            count = self.request_repository.expire_old_requests()
        except Exception:
            logger.exception("Failed to expire old requests")
            return ActionResult.fail("Failed to expire requests", "unexpected")
        logger.info("Expired old requests", extra={"count": count})
        return ActionResult.ok(count)

    def list_for_photographer(
        self, photographer_id: UUID
    ) -> ActionResult[list[InstantPhotoRequest]]:
        """Return the photographer's claimed requests plus nearby open ones."""
        try:
            claimed = self.request_repository.list_claimed_by(
                photographer_id, PHOTOGRAPHER_INBOX_LIMIT
            )
            location = self.location_repository.get_location(photographer_id)
        except Exception:
            logger.exception("Failed to load photographer requests")
            return ActionResult.unexpected()

        if (
            location is None
            or not location.is_online
            or not location.accepting_requests
        ):
            return ActionResult.ok(_merge_newest_first(claimed, []))

        try:
            pending = self.request_repository.list_by_status(
                RequestStatus.PENDING, PENDING_SCAN_LIMIT
            )
        except Exception:
            logger.exception("Failed to load pending requests")
            return ActionResult.unexpected()

        radius = location.response_radius or DEFAULT_RESPONSE_RADIUS_METERS
        nearby = [
            request
            for request in pending
            if not request.is_claimed_by_other(photographer_id)
            and haversine_distance(
                location.latitude,
                location.longitude,
                request.location_lat,
                request.location_lng,
            )
            <= radius
        ]

        try:
            declined = self.response_repository.list_declined_request_ids(
                photographer_id
            )
        except Exception:
            logger.warning("Failed to load declined requests", exc_info=True)
            declined = set()
        available = [request for request in nearby if request.id not in declined]
        return ActionResult.ok(_merge_newest_first(available, claimed))


def _merge_newest_first(
    first: list[InstantPhotoRequest], second: list[InstantPhotoRequest]
) -> list[InstantPhotoRequest]:
    unique: dict[UUID, InstantPhotoRequest] = {}
    for request in [*first, *second]:
        unique[request.id] = request
    ordered = sorted(unique.values(), key=lambda item: item.created_at, reverse=True)
    return ordered[:PHOTOGRAPHER_INBOX_LIMIT]
