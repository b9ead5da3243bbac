"""Adapter around the database matching procedures."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.instant_photo import AutoMatchResult, NearbyPhotographer
from shutterhub.domain.results import ActionResult

logger = logging.getLogger(__name__)


class MatchingRepository(Protocol):
    """Remote procedures that rank and match photographers."""

    def auto_match_request(self, request_id: UUID) -> AutoMatchResult | None:
        """Run the auto-match procedure for a request."""

    def find_nearby_photographers(  # noqa: PLR0913
        self,
        latitude: float,
        longitude: float,
        radius_meters: int,
        request_type: str | None,
        max_budget: int | None,
        urgency: str,
    ) -> list[NearbyPhotographer]:
        """Return photographers ranked by distance and urgency."""


@dataclass
class MatchingService:
    """Pass-through to the external matching computation."""

    repository: MatchingRepository

    def auto_match(self, request_id: UUID) -> ActionResult[AutoMatchResult]:
        """Trigger auto-matching and surface its result."""
        try:
            result = self.repository.auto_match_request(request_id)
        except Exception:
            logger.exception(
                "Auto-match failed", extra={"request_id": str(request_id)}
            )
            return ActionResult.fail("Auto-matching failed", "unexpected")
        if result is None:
            result = AutoMatchResult(message="No match result returned")
        return ActionResult.ok(result)

    def find_nearby_photographers(  # noqa: PLR0913
        self,
        latitude: float,
        longitude: float,
        radius_meters: int = 1000,
        request_type: str | None = None,
        max_budget: int | None = None,
        urgency: str = "normal",
    ) -> ActionResult[list[NearbyPhotographer]]:
        """Search photographers near a point."""
        try:
            photographers = self.repository.find_nearby_photographers(
                latitude=latitude,
                longitude=longitude,
                radius_meters=radius_meters,
                request_type=request_type,
                max_budget=max_budget,
                urgency=urgency,
            )
        except Exception:
            logger.exception("Nearby photographer search failed")
            return ActionResult.fail("Failed to search photographers", "unexpected")
        return ActionResult.ok(photographers)
