"""Monthly usage limits for guest instant photo requests."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from shutterhub.domain.instant_photo import GuestUsage
from shutterhub.domain.results import ActionResult

logger = logging.getLogger(__name__)


class GuestUsageRepository(Protocol):
    """Persistence interface for guest usage history."""

    def count_usage(self, guest_phone: str, usage_month: str) -> int:
        """Return how many requests the phone made in the month bucket."""

    def record_usage(
        self,
        guest_phone: str,
        guest_email: str | None,
        request_id: UUID,
        usage_month: str,
    ) -> None:
        """Append one usage row."""


def current_usage_month(now: datetime | None = None) -> str:
    """Return the ``YYYY-MM`` bucket for the given instant."""
    return (now or datetime.now(tz=UTC)).strftime("%Y-%m")


@dataclass
class GuestUsageService:
    """Checks and records per-phone monthly usage."""

    repository: GuestUsageRepository
    monthly_limit: int = 3

    def check_usage(self, guest_phone: str) -> ActionResult[GuestUsage]:
        """Return whether the phone number may create another request."""
        try:
            count = self.repository.count_usage(guest_phone, current_usage_month())
        except Exception:
            logger.exception("Failed to check guest usage limit")
            return ActionResult.fail("Failed to check the usage limit", "unexpected")
        return ActionResult.ok(
            GuestUsage(
                can_use=count < self.monthly_limit,
                usage_count=count,
                limit=self.monthly_limit,
            )
        )

    def record_usage(
        self, guest_phone: str, guest_email: str | None, request_id: UUID
    ) -> ActionResult[None]:
        """Record usage for a created request; failures are non-fatal."""
        try:
            self.repository.record_usage(
                guest_phone=guest_phone,
                guest_email=guest_email,
                request_id=request_id,
                usage_month=current_usage_month(),
            )
        except Exception:
            logger.exception(
                "Failed to record guest usage", extra={"request_id": str(request_id)}
            )
            return ActionResult.fail("Failed to record usage", "unexpected")
        return ActionResult.ok()
