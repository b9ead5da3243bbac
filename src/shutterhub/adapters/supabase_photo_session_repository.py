"""Supabase repository for organizer photo sessions."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.content import NewPhotoSession, PhotoSession
from shutterhub.services.photo_sessions import PhotoSessionRepository


@dataclass
class SupabasePhotoSessionRepository(PhotoSessionRepository):
    """Supabase implementation for photo sessions."""

    client: Client

    def get_user_type(self, user_id: UUID) -> str | None:
        response = (
            self.client.table("profiles")
            .select("user_type")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("user_type")

    def count_sessions(self, organizer_id: UUID) -> int:
        """Return the number of sessions owned by the organizer."""
        response = (
            self.client.table("photo_sessions")
            .select("id", count="exact")
            .eq("organizer_id", str(organizer_id))
            .execute()
        )
        return int(response.count or 0)

    def create_session(
        self, organizer_id: UUID, data: NewPhotoSession
    ) -> PhotoSession:
        """Create a session row and return it."""
        response = (
            self.client.table("photo_sessions")
            .insert(
                {
                    "organizer_id": str(organizer_id),
                    "title": data.title,
                    "description": data.description,
                    "location": data.location,
                    "address": data.address,
                    "start_time": data.start_time.isoformat(),
                    "end_time": data.end_time.isoformat(),
                    "max_participants": data.max_participants,
                    "price_per_person": data.price_per_person,
                    "booking_type": data.booking_type,
                    "allow_multiple_bookings": data.allow_multiple_bookings,
                    "is_published": data.is_published,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo session")
        row = response.data[0]
        return PhotoSession(
            id=UUID(str(row["id"])),
            organizer_id=UUID(str(row["organizer_id"])),
            title=str(row["title"]),
            location=str(row["location"]),
            start_time=parse_datetime(row["start_time"]) or data.start_time,
            end_time=parse_datetime(row["end_time"]) or data.end_time,
            max_participants=int(row["max_participants"]),
            price_per_person=int(row["price_per_person"]),
            is_published=bool(row.get("is_published")),
        )
