"""Photo session creation behind the plan limit gate."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.content import NewPhotoSession, PhotoSession
from shutterhub.domain.results import ActionResult
from shutterhub.services.feature_limits import FeatureLimitGate

logger = logging.getLogger(__name__)

SESSION_LIMIT_FEATURE = "sessionLimit"


class PhotoSessionRepository(Protocol):
    """Persistence interface for photo sessions."""

    def get_user_type(self, user_id: UUID) -> str | None:
        """Return the profile user type, if the profile exists."""

    def count_sessions(self, organizer_id: UUID) -> int:
        """Return how many sessions the organizer owns."""

    def create_session(
        self, organizer_id: UUID, data: NewPhotoSession
    ) -> PhotoSession:
        """Insert a session and return it."""


@dataclass
class PhotoSessionService:
    """Creates photo sessions, enforcing organizer plan quotas."""

    repository: PhotoSessionRepository
    feature_limit_gate: FeatureLimitGate

    def create_session(
        self, user_id: UUID, data: NewPhotoSession
    ) -> ActionResult[PhotoSession]:
        """Create a session; organizers are limited by their plan."""
        if data.end_time <= data.start_time:
            return ActionResult.fail("End time must be after start time")
        if data.max_participants < 1:
            return ActionResult.fail("At least one participant is required")

        try:
            is_organizer = self.repository.get_user_type(user_id) == "organizer"
            if is_organizer:
                current = self.repository.count_sessions(user_id)
                check = self.feature_limit_gate.check_limit(
                    user_id, SESSION_LIMIT_FEATURE, current
                )
                if not check.allowed:
                    logger.warning(
                        "Session creation limit exceeded",
                        extra={
                            "user_id": str(user_id),
                            "current": check.current_usage,
                            "limit": check.limit,
                            "plan": check.plan_name,
                        },
                    )
                    return ActionResult.fail(
                        f"Session limit reached. The {check.plan_name} plan "
                        f"allows {check.limit} sessions.",
                        "limit_exceeded",
                    )
            session = self.repository.create_session(user_id, data)
        except Exception:
            logger.exception("Failed to create photo session")
            return ActionResult.fail("Failed to create the session", "unexpected")

        if is_organizer:
            self.feature_limit_gate.record_usage(user_id, SESSION_LIMIT_FEATURE)
        return ActionResult.ok(session)
