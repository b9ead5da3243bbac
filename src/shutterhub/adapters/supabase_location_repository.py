"""Supabase repository for photographer presence."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.instant_photo import LocationUpdate, PhotographerLocation
from shutterhub.services.presence import LocationRepository

_TABLE = "photographer_locations"


@dataclass
class SupabaseLocationRepository(LocationRepository):
    """Supabase implementation for photographer locations."""

    client: Client

    def get_location(self, photographer_id: UUID) -> PhotographerLocation | None:
        """Return the location row, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("photographer_id", str(photographer_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_location(response.data[0])

    def upsert_location(
        self, photographer_id: UUID, update: LocationUpdate
    ) -> PhotographerLocation:
        """Insert or replace the location keyed by photographer."""
        payload: dict[str, object] = {
            "photographer_id": str(photographer_id),
            "latitude": update.latitude,
            "longitude": update.longitude,
            "is_online": update.is_online,
            "accepting_requests": update.accepting_requests,
            "accuracy": update.accuracy,
            "available_until": (
                update.available_until.isoformat() if update.available_until else None
            ),
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if update.response_radius is not None:
            payload["response_radius"] = update.response_radius
        if update.instant_rates is not None:
            payload["instant_rates"] = update.instant_rates
        response = (
            self.client.table(_TABLE)
            .upsert(payload, on_conflict="photographer_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update photographer location")
        return _parse_location(response.data[0])

    def delete_location(self, photographer_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq(
            "photographer_id", str(photographer_id)
        ).execute()


def _parse_location(row: dict[str, object]) -> PhotographerLocation:
    radius = row.get("response_radius")
    accuracy = row.get("accuracy")
    return PhotographerLocation(
        photographer_id=UUID(str(row["photographer_id"])),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        is_online=bool(row.get("is_online")),
        accepting_requests=row.get("accepting_requests") is not False,
        response_radius=int(radius) if radius is not None else None,
        accuracy=float(accuracy) if accuracy is not None else None,
        available_until=parse_datetime(row.get("available_until")),
        instant_rates=dict(row.get("instant_rates") or {}),
    )
