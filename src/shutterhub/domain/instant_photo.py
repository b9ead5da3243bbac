"""Domain models for the instant photo flow."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class RequestStatus(str, Enum):
    """Lifecycle states of an instant photo request."""

    PENDING = "pending"
    PHOTOGRAPHER_ACCEPTED = "photographer_accepted"
    MATCHED = "matched"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DELIVERED = "delivered"


TERMINAL_STATUSES = frozenset(
    {RequestStatus.CANCELLED, RequestStatus.DELIVERED, RequestStatus.COMPLETED}
)


class ResponseType(str, Enum):
    """Photographer response kinds."""

    ACCEPT = "accept"
    DECLINE = "decline"


@dataclass(frozen=True)
class NewInstantPhotoRequest:
    """Guest submission for an instant photo request."""

    guest_name: str
    guest_phone: str
    location_lat: float
    location_lng: float
    request_type: str
    urgency: str
    duration: int
    budget: int
    party_size: int = 1
    guest_email: str | None = None
    guest_id: UUID | None = None
    location_address: str | None = None
    location_landmark: str | None = None
    special_requests: str | None = None


@dataclass(frozen=True)
class InstantPhotoRequest:
    """Represents a persisted instant photo request."""

    id: UUID
    status: RequestStatus
    guest_name: str
    guest_phone: str
    location_lat: float
    location_lng: float
    request_type: str
    urgency: str
    duration: int
    budget: int
    created_at: datetime
    expires_at: datetime
    party_size: int = 1
    guest_email: str | None = None
    guest_id: UUID | None = None
    location_address: str | None = None
    location_landmark: str | None = None
    special_requests: str | None = None
    pending_photographer_id: UUID | None = None
    matched_photographer_id: UUID | None = None
    photographer_accepted_at: datetime | None = None
    photographer_timeout_at: datetime | None = None
    guest_approved_at: datetime | None = None
    matched_at: datetime | None = None
    completed_at: datetime | None = None

    def is_claimed_by(self, photographer_id: UUID) -> bool:
        """Return true when this photographer holds the pending or matched claim."""
        if self.status == RequestStatus.MATCHED:
            return self.matched_photographer_id == photographer_id
        if self.status == RequestStatus.PHOTOGRAPHER_ACCEPTED:
            return self.pending_photographer_id == photographer_id
        return False

    def is_claimed_by_other(self, photographer_id: UUID) -> bool:
        """Return true when a different photographer holds the claim."""
        holder = self.matched_photographer_id or self.pending_photographer_id
        return holder is not None and holder != photographer_id


@dataclass(frozen=True)
class PhotographerResponse:
    """One photographer's response to a request."""

    id: UUID
    request_id: UUID
    photographer_id: UUID
    response_type: ResponseType
    decline_reason: str | None = None
    estimated_arrival_time: int | None = None


@dataclass(frozen=True)
class PhotographerLocation:
    """Live presence of a photographer."""

    photographer_id: UUID
    latitude: float
    longitude: float
    is_online: bool
    accepting_requests: bool = True
    response_radius: int | None = None
    accuracy: float | None = None
    available_until: datetime | None = None
    instant_rates: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class LocationUpdate:
    """Location push from a photographer device."""

    latitude: float
    longitude: float
    is_online: bool = True
    accepting_requests: bool = True
    accuracy: float | None = None
    response_radius: int | None = None
    available_until: datetime | None = None
    instant_rates: dict[str, int] | None = None


@dataclass(frozen=True)
class NearbyPhotographer:
    """Row returned by the nearby photographer search."""

    photographer_id: UUID
    distance_meters: float
    display_name: str | None = None
    rate: int | None = None
    priority_score: float | None = None


@dataclass(frozen=True)
class AutoMatchResult:
    """Outcome of the database auto-match procedure."""

    message: str
    matched_photographer_id: UUID | None = None
    distance_meters: float | None = None


@dataclass(frozen=True)
class GuestUsage:
    """Monthly usage state for a guest phone number."""

    can_use: bool
    usage_count: int
    limit: int
