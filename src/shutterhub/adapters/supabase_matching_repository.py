"""Supabase adapter for the matching procedures."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_uuid
from shutterhub.domain.instant_photo import AutoMatchResult, NearbyPhotographer
from shutterhub.services.matching import MatchingRepository


@dataclass
class SupabaseMatchingRepository(MatchingRepository):
    """Calls the database-side matching procedures."""

    client: Client

    def auto_match_request(self, request_id: UUID) -> AutoMatchResult | None:
        """Run ``auto_match_request`` and parse its first row."""
        response = self.client.rpc(
            "auto_match_request", {"request_id": str(request_id)}
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        distance = data.get("distance_meters")
        return AutoMatchResult(
            message=str(data.get("message") or ""),
            matched_photographer_id=parse_uuid(data.get("matched_photographer_id")),
            distance_meters=float(distance) if distance is not None else None,
        )

    def find_nearby_photographers(  # noqa: PLR0913
        self,
        latitude: float,
        longitude: float,
        radius_meters: int,
        request_type: str | None,
        max_budget: int | None,
        urgency: str,
    ) -> list[NearbyPhotographer]:
        """Return ranked photographers around a point."""
        response = self.client.rpc(
            "find_nearby_photographers_with_urgency",
            {
                "target_lat": latitude,
                "target_lng": longitude,
                "radius_meters": radius_meters,
                "request_type": request_type,
                "max_budget": max_budget,
                "urgency_level": urgency,
            },
        ).execute()
        photographers = []
        for row in response.data or []:
            rate = row.get("rate")
            score = row.get("priority_score")
            photographers.append(
                NearbyPhotographer(
                    photographer_id=UUID(str(row["photographer_id"])),
                    distance_meters=float(row.get("distance_meters") or 0),
                    display_name=row.get("display_name"),
                    rate=int(rate) if rate is not None else None,
                    priority_score=float(score) if score is not None else None,
                )
            )
        return photographers
