"""Plan-based feature quota gate."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.subscriptions import FeatureLimitCheck

logger = logging.getLogger(__name__)

FREE_TIER_LIMIT = 3
FREE_PLAN_NAME = "Free plan"
FALLBACK_PLAN_NAME = "Free plan (fallback)"


class FeatureLimitRepository(Protocol):
    """Remote procedures evaluating plan limits."""

    def check_feature_limit(
        self, user_id: UUID, feature_name: str, current_usage: int
    ) -> FeatureLimitCheck | None:
        """Evaluate the limit for the user's active plan."""

    def record_feature_usage(
        self, user_id: UUID, feature_name: str, amount: int
    ) -> None:
        """Increment the usage counter for a feature."""


def _free_tier(current_usage: int, plan_name: str) -> FeatureLimitCheck:
    return FeatureLimitCheck(
        allowed=current_usage < FREE_TIER_LIMIT,
        current_usage=current_usage,
        limit=FREE_TIER_LIMIT,
        remaining=max(0, FREE_TIER_LIMIT - current_usage),
        plan_name=plan_name,
    )


@dataclass
class FeatureLimitGate:
    """Checks and records plan quota usage."""

    repository: FeatureLimitRepository

    def check_limit(
        self, user_id: UUID, feature_name: str, current_usage: int = 0
    ) -> FeatureLimitCheck:
        """Return the quota state, falling back to the free tier on errors."""
        try:
            result = self.repository.check_feature_limit(
                user_id, feature_name, current_usage
            )
        except Exception:
            logger.exception(
                "Feature limit check failed", extra={"feature": feature_name}
            )
            return _free_tier(current_usage, FALLBACK_PLAN_NAME)
        if result is None:
            return _free_tier(current_usage, FREE_PLAN_NAME)
        return result

    def record_usage(self, user_id: UUID, feature_name: str, amount: int = 1) -> bool:
        """Increment usage; returns False instead of raising on failure."""
        try:
            self.repository.record_feature_usage(user_id, feature_name, amount)
        except Exception:
            logger.exception(
                "Failed to record feature usage", extra={"feature": feature_name}
            )
            return False
        return True
