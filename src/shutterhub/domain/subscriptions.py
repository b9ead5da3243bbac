"""Subscription and plan-limit domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FeatureLimitCheck:
    """Result of a plan-based feature quota check."""

    allowed: bool
    current_usage: int
    limit: int
    remaining: int
    plan_name: str


@dataclass(frozen=True)
class SubscriptionPlan:
    """A purchasable plan."""

    id: str
    name: str
    user_type: str
    tier: str
    price: int
    stripe_price_id: str | None = None
    description: str | None = None
    features: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class UserSubscription:
    """A user's subscription row."""

    id: UUID
    user_id: UUID
    plan_id: str
    status: str
    stripe_subscription_id: str | None = None
    stripe_customer_id: str | None = None
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False
