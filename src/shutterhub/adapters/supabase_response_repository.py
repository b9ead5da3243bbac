"""Supabase repository for photographer responses."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.domain.instant_photo import PhotographerResponse, ResponseType
from shutterhub.services.requests import ResponseRepository

_TABLE = "photographer_request_responses"


@dataclass
class SupabaseResponseRepository(ResponseRepository):
    """Supabase-backed response repository."""

    client: Client

    def get_response(
        self, request_id: UUID, photographer_id: UUID
    ) -> PhotographerResponse | None:
        """Return the response for a request and photographer, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("request_id", str(request_id))
            .eq("photographer_id", str(photographer_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PhotographerResponse(
            id=UUID(str(row["id"])),
            request_id=UUID(str(row["request_id"])),
            photographer_id=UUID(str(row["photographer_id"])),
            response_type=ResponseType(row["response_type"]),
            decline_reason=row.get("decline_reason"),
            estimated_arrival_time=row.get("estimated_arrival_time"),
        )

    def create_response(  # noqa: PLR0913
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
        estimated_arrival_time: int | None = None,
    ) -> None:
        """Insert a response row."""
        self.client.table(_TABLE).insert(
            {
                "request_id": str(request_id),
                "photographer_id": str(photographer_id),
                "response_type": response_type.value,
                "decline_reason": decline_reason,
                "estimated_arrival_time": estimated_arrival_time,
            }
        ).execute()

    def update_response(
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
    ) -> None:
        """Overwrite the response type and reason for the pair."""
        self.client.table(_TABLE).update(
            {
                "response_type": response_type.value,
                "decline_reason": decline_reason,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("request_id", str(request_id)).eq(
            "photographer_id", str(photographer_id)
        ).execute()

    def list_declined_request_ids(self, photographer_id: UUID) -> set[UUID]:
        response = (
            self.client.table(_TABLE)
            .select("request_id")
            .eq("photographer_id", str(photographer_id))
            .eq("response_type", ResponseType.DECLINE.value)
            .execute()
        )
        return {UUID(str(row["request_id"])) for row in response.data or []}
