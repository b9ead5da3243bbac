"""Supabase-backed instant photo request repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import (
    parse_datetime,
    parse_uuid,
    to_column_value,
    to_payload,
)
from shutterhub.domain.instant_photo import (
    InstantPhotoRequest,
    NewInstantPhotoRequest,
    RequestStatus,
)
from shutterhub.services.requests import RequestRepository

_TABLE = "instant_photo_requests"


@dataclass
class SupabaseRequestRepository(RequestRepository):
    """Supabase implementation for instant photo requests."""

    client: Client

    def create_request(
        self, data: NewInstantPhotoRequest, expires_at: datetime
    ) -> InstantPhotoRequest:
        """Insert a pending request and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "guest_name": data.guest_name,
                    "guest_phone": data.guest_phone,
                    "guest_email": data.guest_email,
                    "guest_id": str(data.guest_id) if data.guest_id else None,
                    "party_size": data.party_size,
                    "location_lat": data.location_lat,
                    "location_lng": data.location_lng,
                    "location_address": data.location_address,
                    "location_landmark": data.location_landmark,
                    "request_type": data.request_type,
                    "urgency": data.urgency,
                    "duration": data.duration,
                    "budget": data.budget,
                    "special_requests": data.special_requests,
                    "status": RequestStatus.PENDING.value,
                    "expires_at": expires_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create instant photo request")
        return _parse_request(response.data[0])

    def get_request(self, request_id: UUID) -> InstantPhotoRequest | None:
        """Return a request by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(request_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_request(response.data[0])

    def list_by_guest_phone(
        self, guest_phone: str, limit: int
    ) -> list[InstantPhotoRequest]:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("guest_phone", guest_phone)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_request(row) for row in response.data or []]

    def list_claimed_by(
        self, photographer_id: UUID, limit: int
    ) -> list[InstantPhotoRequest]:
        """Return requests where the photographer is pending or matched."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .or_(
                f"pending_photographer_id.eq.{photographer_id},"
                f"matched_photographer_id.eq.{photographer_id}"
            )
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_request(row) for row in response.data or []]

    def list_by_status(
        self, status: RequestStatus, limit: int
    ) -> list[InstantPhotoRequest]:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("status", status.value)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_request(row) for row in response.data or []]

    def compare_and_set(
        self,
        request_id: UUID,
        expected: dict[str, object],
        changes: dict[str, object],
    ) -> InstantPhotoRequest | None:
        """Run one conditional update; None when the guard matched no row."""
        query = (
            self.client.table(_TABLE)
            .update(to_payload(changes))
            .eq("id", str(request_id))
        )
        for column, value in expected.items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, to_column_value(value))
        response = query.execute()
        if not response.data:
            return None
        return _parse_request(response.data[0])

    def revert_expired_claims(self, now: datetime) -> int:
        """Reopen every accepted request whose timeout is in the past."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "status": RequestStatus.PENDING.value,
                    "pending_photographer_id": None,
                    "photographer_accepted_at": None,
                    "photographer_timeout_at": None,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("status", RequestStatus.PHOTOGRAPHER_ACCEPTED.value)
            .lt("photographer_timeout_at", now.isoformat())
            .execute()
        )
        return len(response.data or [])

    def expire_old_requests(self) -> int:
        response = self.client.rpc("expire_old_requests", {}).execute()
        if isinstance(response.data, int):
            return response.data
        return len(response.data or [])


def _parse_request(row: dict[str, object]) -> InstantPhotoRequest:
    """Parse a request row into a domain model."""
    return InstantPhotoRequest(
        id=UUID(str(row["id"])),
        status=RequestStatus(row["status"]),
        guest_name=str(row["guest_name"]),
        guest_phone=str(row["guest_phone"]),
        guest_email=row.get("guest_email"),
        guest_id=parse_uuid(row.get("guest_id")),
        party_size=int(row.get("party_size") or 1),
        location_lat=float(row["location_lat"]),
        location_lng=float(row["location_lng"]),
        location_address=row.get("location_address"),
        location_landmark=row.get("location_landmark"),
        request_type=str(row["request_type"]),
        urgency=str(row["urgency"]),
        duration=int(row["duration"]),
        budget=int(row["budget"]),
        special_requests=row.get("special_requests"),
        created_at=parse_datetime(row.get("created_at")) or datetime.now(tz=UTC),
        expires_at=parse_datetime(row.get("expires_at")) or datetime.now(tz=UTC),
        pending_photographer_id=parse_uuid(row.get("pending_photographer_id")),
        matched_photographer_id=parse_uuid(row.get("matched_photographer_id")),
        photographer_accepted_at=parse_datetime(row.get("photographer_accepted_at")),
        photographer_timeout_at=parse_datetime(row.get("photographer_timeout_at")),
        guest_approved_at=parse_datetime(row.get("guest_approved_at")),
        matched_at=parse_datetime(row.get("matched_at")),
        completed_at=parse_datetime(row.get("completed_at")),
    )
