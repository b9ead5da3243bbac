"""Domain models for organizer content gated by plan limits."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PhotoSession:
    """A published photo session."""

    id: UUID
    organizer_id: UUID
    title: str
    location: str
    start_time: datetime
    end_time: datetime
    max_participants: int
    price_per_person: int
    is_published: bool


@dataclass(frozen=True)
class Photobook:
    """A user's photobook."""

    id: UUID
    user_id: UUID
    title: str
    photobook_type: str
    is_published: bool = False


@dataclass(frozen=True)
class NewPhotoSession:
    """Organizer input for a photo session."""

    title: str
    location: str
    start_time: datetime
    end_time: datetime
    max_participants: int
    price_per_person: int
    is_published: bool = False
    description: str | None = None
    address: str | None = None
    booking_type: str | None = None
    allow_multiple_bookings: bool = False


@dataclass(frozen=True)
class NewPhotobook:
    """User input for a photobook."""

    title: str
    photobook_type: str = "quick"
    description: str | None = None
