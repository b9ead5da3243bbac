"""Photographer online presence and location."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.instant_photo import LocationUpdate, PhotographerLocation
from shutterhub.domain.results import ActionResult

logger = logging.getLogger(__name__)


class LocationRepository(Protocol):
    """Persistence interface for photographer locations."""

    def get_location(self, photographer_id: UUID) -> PhotographerLocation | None:
        """Return the location row, if present."""

    def upsert_location(
        self, photographer_id: UUID, update: LocationUpdate
    ) -> PhotographerLocation:
        """Insert or replace the location row."""

    def delete_location(self, photographer_id: UUID) -> None:
        """Remove the location row."""


@dataclass
class PresenceService:
    """Manages photographer availability for instant requests."""

    repository: LocationRepository

    def update_location(
        self, photographer_id: UUID, update: LocationUpdate
    ) -> ActionResult[PhotographerLocation]:
        """Store a location push."""
        try:
            location = self.repository.upsert_location(photographer_id, update)
        except Exception:
            logger.exception(
                "Failed to update location",
                extra={"photographer_id": str(photographer_id)},
            )
            return ActionResult.fail("Failed to update location", "unexpected")
        return ActionResult.ok(location)

    def set_online(
        self,
        photographer_id: UUID,
        online: bool,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> ActionResult[PhotographerLocation | None]:
        """Go online at a location, or go offline by dropping the row."""
        if online:
            if latitude is None or longitude is None:
                return ActionResult.fail("A location is required to go online")
            return self.update_location(
                photographer_id,
                LocationUpdate(
                    latitude=latitude,
                    longitude=longitude,
                    is_online=True,
                    accepting_requests=True,
                ),
            )
        try:
            self.repository.delete_location(photographer_id)
        except Exception:
            logger.exception(
                "Failed to delete location",
                extra={"photographer_id": str(photographer_id)},
            )
            return ActionResult.fail("Failed to update status", "unexpected")
        return ActionResult.ok(None)

    def is_online(self, photographer_id: UUID) -> ActionResult[bool]:
        """Return the online flag; a missing row means offline."""
        try:
            location = self.repository.get_location(photographer_id)
        except Exception:
            logger.exception("Failed to load online status")
            return ActionResult.fail("Failed to load online status", "unexpected")
        return ActionResult.ok(location is not None and location.is_online)
