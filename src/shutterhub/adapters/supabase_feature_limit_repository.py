"""Supabase adapter for plan feature limits."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shutterhub.domain.subscriptions import FeatureLimitCheck
from shutterhub.services.feature_limits import FeatureLimitRepository


@dataclass
class SupabaseFeatureLimitRepository(FeatureLimitRepository):
    """Evaluates plan limits with database procedures."""

    client: Client

    def check_feature_limit(
        self, user_id: UUID, feature_name: str, current_usage: int
    ) -> FeatureLimitCheck | None:
        """Return the limit state, or None when the procedure returns no row."""
        response = self.client.rpc(
            "check_feature_limit",
            {
                "user_uuid": str(user_id),
                "feature_name": feature_name,
                "current_usage": current_usage,
            },
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        return FeatureLimitCheck(
            allowed=bool(data.get("allowed")),
            current_usage=int(data.get("current_usage_count") or 0),
            limit=int(data.get("limit_value") or 0),
            remaining=int(data.get("remaining") or 0),
            plan_name=str(data.get("plan_name") or ""),
        )

    def record_feature_usage(
        self, user_id: UUID, feature_name: str, amount: int
    ) -> None:
        self.client.rpc(
            "record_feature_usage",
            {
                "user_uuid": str(user_id),
                "feature_name": feature_name,
                "increment_amount": amount,
            },
        ).execute()
