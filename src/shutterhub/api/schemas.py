"""Pydantic request bodies for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from shutterhub.domain.instant_photo import RequestStatus, ResponseType


class CreateInstantRequestBody(BaseModel):
    """Guest submission for an instant photo request."""

    guest_name: str = Field(min_length=1)
    guest_phone: str = Field(min_length=1)
    guest_email: str | None = None
    guest_id: UUID | None = None
    party_size: int = Field(default=1, ge=1)
    location_lat: float = Field(ge=-90, le=90)
    location_lng: float = Field(ge=-180, le=180)
    location_address: str | None = None
    location_landmark: str | None = None
    request_type: str
    urgency: str = "normal"
    duration: int = Field(gt=0)
    budget: int = Field(ge=0)
    special_requests: str | None = None


class RespondBody(BaseModel):
    """Photographer accept or decline."""

    response_type: ResponseType
    decline_reason: str | None = None
    estimated_arrival_time: int | None = Field(default=None, gt=0)


class GuestDecisionBody(BaseModel):
    """Guest approval or rejection of the pending photographer."""

    photographer_id: UUID


class StatusUpdateBody(BaseModel):
    status: RequestStatus


class LocationBody(BaseModel):
    """Location push from a photographer device."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    is_online: bool = True
    accepting_requests: bool = True
    accuracy: float | None = None
    response_radius: int | None = Field(default=None, gt=0)
    available_until: datetime | None = None
    instant_rates: dict[str, int] | None = None


class OnlineBody(BaseModel):
    online: bool
    latitude: float | None = None
    longitude: float | None = None


class PhotoSessionBody(BaseModel):
    """Organizer input for a new photo session."""

    title: str = Field(min_length=1)
    location: str
    start_time: datetime
    end_time: datetime
    max_participants: int
    price_per_person: int = Field(ge=0)
    is_published: bool = False
    description: str | None = None
    address: str | None = None
    booking_type: str | None = None
    allow_multiple_bookings: bool = False


class PhotobookBody(BaseModel):
    title: str = Field(min_length=1)
    photobook_type: str = "quick"
    description: str | None = None


class CustomerBody(BaseModel):
    email: str
    name: str | None = None


class SubscriptionBody(BaseModel):
    plan_id: str
    email: str
    name: str | None = None


class EscrowBody(BaseModel):
    booking_id: UUID
    guest_phone: str


class EscrowConfirmBody(BaseModel):
    payment_intent_id: str


class DeliveryBody(BaseModel):
    delivery_method: str = "external_url"
    photo_count: int = Field(gt=0)
    delivery_url: str | None = None
    external_url: str | None = None
    external_service: str | None = None
    photographer_message: str | None = None


class DeliveryReviewBody(BaseModel):
    """Guest verdict; an unsatisfied review opens a dispute instead of paying out."""

    is_satisfied: bool
    photographer_rating: int | None = Field(default=None, ge=1, le=5)
    photographer_review: str | None = None
    photo_quality_rating: int | None = Field(default=None, ge=1, le=5)
    service_rating: int | None = Field(default=None, ge=1, le=5)
    would_recommend: bool | None = None
    issues: list[str] = Field(default_factory=list)
