"""Supabase repository for plans and user subscriptions."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from shutterhub.adapters.supabase_rows import parse_datetime
from shutterhub.domain.subscriptions import SubscriptionPlan, UserSubscription
from shutterhub.services.payments import StripeSubscription
from shutterhub.services.subscriptions import SubscriptionRepository


@dataclass
class SupabaseSubscriptionRepository(SubscriptionRepository):
    """Supabase implementation for subscription data."""

    client: Client

    def list_plans(self, user_type: str) -> list[SubscriptionPlan]:
        """Return active plans for a user type in display order."""
        response = (
            self.client.table("subscription_plans")
            .select("*")
            .eq("user_type", user_type)
            .eq("is_active", True)
            .order("display_order")
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        response = (
            self.client.table("subscription_plans")
            .select("*")
            .eq("id", plan_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def get_active_subscription(self, user_id: UUID) -> UserSubscription | None:
        response = (
            self.client.table("user_subscriptions")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("status", "active")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_subscription(response.data[0])

    def save_subscription(
        self,
        user_id: UUID,
        plan_id: str,
        customer_id: str,
        subscription: StripeSubscription,
    ) -> UserSubscription:
        """Upsert the user's subscription row keyed by user."""
        response = (
            self.client.table("user_subscriptions")
            .upsert(
                {
                    "user_id": str(user_id),
                    "plan_id": plan_id,
                    "stripe_customer_id": customer_id,
                    "stripe_subscription_id": subscription.id,
                    "status": subscription.status,
                    "current_period_start": (
                        subscription.current_period_start.isoformat()
                        if subscription.current_period_start
                        else None
                    ),
                    "current_period_end": (
                        subscription.current_period_end.isoformat()
                        if subscription.current_period_end
                        else None
                    ),
                    "cancel_at_period_end": False,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save subscription")
        return _parse_subscription(response.data[0])

    def set_cancel_at_period_end(self, subscription_id: UUID) -> None:
        self.client.table("user_subscriptions").update(
            {
                "cancel_at_period_end": True,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(subscription_id)).execute()


def _parse_plan(row: dict[str, object]) -> SubscriptionPlan:
    return SubscriptionPlan(
        id=str(row["id"]),
        name=str(row["name"]),
        user_type=str(row["user_type"]),
        tier=str(row.get("tier") or ""),
        price=int(row.get("price") or 0),
        stripe_price_id=row.get("stripe_price_id"),
        description=row.get("description"),
        features=dict(row.get("features") or {}),
    )


def _parse_subscription(row: dict[str, object]) -> UserSubscription:
    return UserSubscription(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        plan_id=str(row["plan_id"]),
        status=str(row["status"]),
        stripe_subscription_id=row.get("stripe_subscription_id"),
        stripe_customer_id=row.get("stripe_customer_id"),
        current_period_start=parse_datetime(row.get("current_period_start")),
        current_period_end=parse_datetime(row.get("current_period_end")),
        cancel_at_period_end=bool(row.get("cancel_at_period_end")),
    )
