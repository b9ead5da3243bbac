"""Supabase repository for instant bookings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.bookings import FeeSplit, InstantBooking
from shutterhub.services.bookings import BookingRepository

_TABLE = "instant_bookings"


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase-backed booking repository."""

    client: Client

    def get_booking(self, booking_id: UUID) -> InstantBooking | None:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(booking_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def get_booking_for_request(self, request_id: UUID) -> InstantBooking | None:
        """Return the booking created for a request, if any."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("request_id", str(request_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def create_booking(
        self,
        request_id: UUID,
        photographer_id: UUID,
        split: FeeSplit,
        start_time: datetime | None,
    ) -> InstantBooking:
        """Insert a booking awaiting payment."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "request_id": str(request_id),
                    "photographer_id": str(photographer_id),
                    "total_amount": split.total_amount,
                    "platform_fee": split.platform_fee,
                    "photographer_earnings": split.photographer_earnings,
                    "payment_status": "pending",
                    "start_time": start_time.isoformat() if start_time else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create booking")
        return _parse_booking(response.data[0])

    def mark_paid(self, booking_id: UUID) -> InstantBooking | None:
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "payment_status": "paid",
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(booking_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_booking(response.data[0])

    def record_delivery(
        self,
        booking_id: UUID,
        photo_count: int,
        delivery_url: str | None,
        end_time: datetime,
    ) -> None:
        self.client.table(_TABLE).update(
            {
                "photos_delivered": photo_count,
                "delivery_url": delivery_url,
                "end_time": end_time.isoformat(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(booking_id)).execute()

    def record_review(
        self, booking_id: UUID, rating: int | None, review: str | None
    ) -> None:
        self.client.table(_TABLE).update(
            {
                "guest_rating": rating,
                "guest_review": review,
                "payment_status": "paid",
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(booking_id)).execute()


def _parse_booking(row: dict[str, object]) -> InstantBooking:
    return InstantBooking(
        id=UUID(str(row["id"])),
        request_id=UUID(str(row["request_id"])),
        photographer_id=UUID(str(row["photographer_id"])),
        total_amount=int(row["total_amount"]),
        platform_fee=int(row["platform_fee"]),
        photographer_earnings=int(row["photographer_earnings"]),
        payment_status=str(row.get("payment_status") or "pending"),
        start_time=parse_datetime(row.get("start_time")),
        created_at=parse_datetime(row.get("created_at")),
    )
