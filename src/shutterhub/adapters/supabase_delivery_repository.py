"""Supabase repository for photo deliveries and guest reviews."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.bookings import DeliveryReview, NewPhotoDelivery, PhotoDelivery
from shutterhub.services.deliveries import DeliveryRepository

_DELIVERIES_TABLE = "photo_deliveries"
_REVIEWS_TABLE = "instant_photo_reviews"


@dataclass
class SupabaseDeliveryRepository(DeliveryRepository):
    """Supabase-backed delivery repository."""

    client: Client

    def save_delivery(
        self,
        booking_id: UUID,
        data: NewPhotoDelivery,
        delivered_at: datetime,
        download_expires_at: datetime,
    ) -> PhotoDelivery:
        """One delivery per booking; a second delivery replaces the first."""
        payload = {
            "booking_id": str(booking_id),
            "delivery_method": data.delivery_method,
            "photo_count": data.photo_count,
            "delivery_url": data.delivery_url,
            "external_url": data.external_url,
            "external_service": data.external_service,
            "photographer_message": data.photographer_message,
            "delivered_at": delivered_at.isoformat(),
            "download_expires_at": download_expires_at.isoformat(),
        }
        response = (
            self.client.table(_DELIVERIES_TABLE)
            .upsert(payload, on_conflict="booking_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save photo delivery")
        return _parse_delivery(response.data[0])

    def mark_confirmed(self, booking_id: UUID, confirmed_at: datetime) -> None:
        self.client.table(_DELIVERIES_TABLE).update(
            {"confirmed_at": confirmed_at.isoformat()}
        ).eq("booking_id", str(booking_id)).execute()

    def create_review(self, booking_id: UUID, review: DeliveryReview) -> None:
        self.client.table(_REVIEWS_TABLE).insert(
            {
                "booking_id": str(booking_id),
                "photographer_rating": review.photographer_rating,
                "photographer_review": review.photographer_review,
                "photo_quality_rating": review.photo_quality_rating,
                "service_rating": review.service_rating,
                "would_recommend": review.would_recommend,
                "issues": review.issues,
            }
        ).execute()


def _parse_delivery(row: dict[str, object]) -> PhotoDelivery:
    return PhotoDelivery(
        id=UUID(str(row["id"])),
        booking_id=UUID(str(row["booking_id"])),
        delivery_method=str(row["delivery_method"]),
        photo_count=int(row["photo_count"]),
        delivery_url=row.get("delivery_url"),
        external_url=row.get("external_url"),
        photographer_message=row.get("photographer_message"),
        delivered_at=parse_datetime(row.get("delivered_at")),
        download_expires_at=parse_datetime(row.get("download_expires_at")),
    )
