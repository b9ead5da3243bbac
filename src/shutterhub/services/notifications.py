"""User-facing notifications."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from shutterhub.domain.instant_photo import InstantPhotoRequest
from shutterhub.domain.results import ActionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A notification to be stored for a user."""

    user_id: UUID
    type: str
    category: str
    title: str
    message: str
    priority: str = "normal"
    data: dict[str, object] = field(default_factory=dict)
    related_entity_type: str | None = None
    related_entity_id: UUID | None = None
    action_url: str | None = None
    action_label: str | None = None


class NotificationRepository(Protocol):
    """Persistence interface for notifications and profile lookups."""

    def get_display_name(self, user_id: UUID) -> str | None:
        """Return a profile display name, if the profile exists."""

    def create_notification(self, notification: Notification) -> None:
        """Insert a notification row."""


@dataclass
class NotificationService:
    """Fire-and-forget notification creation."""

    repository: NotificationRepository

    def notify_match_found(
        self,
        request: InstantPhotoRequest,
        photographer_id: UUID,
        booking_id: UUID | None,
    ) -> ActionResult[None]:
        """Tell the guest a photographer was confirmed; never raises."""
        if request.guest_id is None:
            return ActionResult.ok()
        try:
            name = self.repository.get_display_name(photographer_id)
            if name is None:
                return ActionResult.fail("Photographer profile not found", "not_found")
            self.repository.create_notification(
                Notification(
                    user_id=request.guest_id,
                    type="instant_photo_match_found",
                    category="instant_photo",
                    priority="high",
                    title="Photographer confirmed",
                    message=f"{name} is on the way for your photo request.",
                    data={
                        "request_id": str(request.id),
                        "photographer_id": str(photographer_id),
                        "photographer_name": name,
                        "booking_id": str(booking_id) if booking_id else None,
                        "budget": request.budget,
                    },
                    related_entity_type="instant_photo_request",
                    related_entity_id=request.id,
                    action_url=f"/instant/{request.id}",
                    action_label="Proceed to payment",
                )
            )
        except Exception:
            logger.exception(
                "Failed to send match notification",
                extra={"request_id": str(request.id)},
            )
            return ActionResult.fail("Failed to send notification", "unexpected")
        return ActionResult.ok()

    def notify_photos_delivered(
        self,
        request: InstantPhotoRequest,
        photographer_id: UUID,
        booking_id: UUID,
        photo_count: int,
    ) -> ActionResult[None]:
        """Tell the guest the photos are ready; never raises."""
        if request.guest_id is None:
            return ActionResult.ok()
        try:
            name = self.repository.get_display_name(photographer_id) or ""
            self.repository.create_notification(
                Notification(
                    user_id=request.guest_id,
                    type="instant_photo_photos_delivered",
                    category="instant_photo",
                    priority="high",
                    title="Your photos are ready",
                    message=f"{name} delivered {photo_count} photos.",
                    data={
                        "booking_id": str(booking_id),
                        "request_id": str(request.id),
                        "photographer_id": str(photographer_id),
                        "photo_count": photo_count,
                    },
                    related_entity_type="instant_booking",
                    related_entity_id=booking_id,
                    action_url=f"/instant/{request.id}",
                    action_label="View photos",
                )
            )
        except Exception:
            logger.exception(
                "Failed to send delivery notification",
                extra={"booking_id": str(booking_id)},
            )
            return ActionResult.fail("Failed to send notification", "unexpected")
        return ActionResult.ok()
