"""Domain models for bookings and escrow payments."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FeeSplit:
    """Platform fee and photographer share of a booking total."""

    total_amount: int
    platform_fee: int
    photographer_earnings: int


@dataclass(frozen=True)
class InstantBooking:
    """Monetary commitment for a confirmed match."""

    id: UUID
    request_id: UUID
    photographer_id: UUID
    total_amount: int
    platform_fee: int
    photographer_earnings: int
    payment_status: str
    start_time: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class EscrowPayment:
    """Escrowed card payment for an instant booking."""

    id: UUID
    booking_id: UUID
    stripe_payment_intent_id: str
    total_amount: int
    platform_fee: int
    photographer_earnings: int
    escrow_status: str
    delivery_status: str
    auto_confirm_at: datetime | None = None
    escrowed_at: datetime | None = None
    delivered_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class NewPhotoDelivery:
    """Photographer input when handing over the photos."""

    delivery_method: str
    photo_count: int
    delivery_url: str | None = None
    external_url: str | None = None
    external_service: str | None = None
    photographer_message: str | None = None


@dataclass(frozen=True)
class PhotoDelivery:
    id: UUID
    booking_id: UUID
    delivery_method: str
    photo_count: int
    delivery_url: str | None = None
    external_url: str | None = None
    photographer_message: str | None = None
    delivered_at: datetime | None = None
    download_expires_at: datetime | None = None


@dataclass(frozen=True)
class DeliveryReview:
    """Guest verdict on a delivery; unsatisfied opens a dispute."""

    is_satisfied: bool
    photographer_rating: int | None = None
    photographer_review: str | None = None
    photo_quality_rating: int | None = None
    service_rating: int | None = None
    would_recommend: bool | None = None
    issues: list[str] = field(default_factory=list)
