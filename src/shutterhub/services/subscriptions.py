"""Subscription plans and billing."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shutterhub.domain.results import ActionResult
from shutterhub.domain.subscriptions import SubscriptionPlan, UserSubscription
from shutterhub.services.cache import Cache
from shutterhub.services.payments import PaymentsClient, StripeSubscription

logger = logging.getLogger(__name__)


class SubscriptionRepository(Protocol):
    """Persistence interface for plans and subscriptions."""

    def list_plans(self, user_type: str) -> list[SubscriptionPlan]:
        """Return active plans for a user type in display order."""

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        """Return a plan by id."""

    def get_active_subscription(self, user_id: UUID) -> UserSubscription | None:
        """Return the user's active subscription, if any."""

    def save_subscription(
        self,
        user_id: UUID,
        plan_id: str,
        customer_id: str,
        subscription: StripeSubscription,
    ) -> UserSubscription:
        """Insert or update the user's subscription row."""

    def set_cancel_at_period_end(self, subscription_id: UUID) -> None:
        """Flag a subscription to end with its current period."""


@dataclass(frozen=True)
class SubscriptionCheckout:
    """What the client needs to confirm a new subscription."""

    subscription: UserSubscription
    client_secret: str | None


@dataclass
class SubscriptionService:
    """Plan listing and subscription lifecycle."""

    repository: SubscriptionRepository
    payments_client: PaymentsClient
    cache: Cache
    plan_cache_ttl_seconds: int = 300

    def get_plans_for_user_type(
        self, user_type: str
    ) -> ActionResult[list[SubscriptionPlan]]:
        """Return plans for a user type, cached for a short while."""
        try:
            plans = self.cache.get_or_fetch(
                f"plans:{user_type}",
                lambda: self.repository.list_plans(user_type),
                self.plan_cache_ttl_seconds,
            )
        except Exception:
            logger.exception("Failed to load plans", extra={"user_type": user_type})
            return ActionResult.fail("Failed to load plans", "unexpected")
        return ActionResult.ok(list(plans))

    def get_current_subscription(
        self, user_id: UUID
    ) -> ActionResult[UserSubscription | None]:
        try:
            subscription = self.repository.get_active_subscription(user_id)
        except Exception:
            logger.exception("Failed to load subscription")
            return ActionResult.unexpected()
        return ActionResult.ok(subscription)

    def create_or_get_customer(
        self, user_id: UUID, email: str, name: str | None = None
    ) -> ActionResult[str]:
        """Reuse the customer tagged with this user, or create one."""
        try:
            customer_id = self.payments_client.find_customer(user_id)
            if customer_id is None:
                customer_id = self.payments_client.create_customer(user_id, email, name)
                logger.info(
                    "Payment customer created",
                    extra={"user_id": str(user_id), "customer_id": customer_id},
                )
        except Exception:
            logger.exception("Failed to create payment customer")
            return ActionResult.fail("Failed to create the customer", "unexpected")
        return ActionResult.ok(customer_id)

    def create_subscription(
        self, user_id: UUID, plan_id: str, email: str, name: str | None = None
    ) -> ActionResult[SubscriptionCheckout]:
        """Start a paid subscription for a plan."""
        try:
            plan = self.repository.get_plan(plan_id)
            current = self.repository.get_active_subscription(user_id)
        except Exception:
            logger.exception("Failed to load plan")
            return ActionResult.unexpected()
        if plan is None:
            return ActionResult.fail("Plan not found", "not_found")
        if not plan.stripe_price_id:
            return ActionResult.fail("This plan cannot be purchased")
        if current is not None and current.plan_id == plan_id:
            return ActionResult.fail("Already subscribed to this plan", "conflict")

        customer = self.create_or_get_customer(user_id, email, name)
        if not customer.success or customer.data is None:
            return ActionResult.fail(customer.error or "Failed", customer.code)
        try:
            created = self.payments_client.create_subscription(
                customer.data,
                plan.stripe_price_id,
                metadata={"user_id": str(user_id), "plan_id": plan_id},
            )
            saved = self.repository.save_subscription(
                user_id, plan_id, customer.data, created
            )
        except Exception:
            logger.exception(
                "Failed to create subscription", extra={"plan_id": plan_id}
            )
            return ActionResult.fail("Failed to create the subscription", "unexpected")
        return ActionResult.ok(
            SubscriptionCheckout(
                subscription=saved, client_secret=created.client_secret
            )
        )

    def cancel_subscription(self, user_id: UUID) -> ActionResult[None]:
        """Cancel the active subscription at the end of its period."""
        try:
            current = self.repository.get_active_subscription(user_id)
            if current is None:
                return ActionResult.fail("No active subscription", "not_found")
            if current.stripe_subscription_id:
                self.payments_client.cancel_subscription_at_period_end(
                    current.stripe_subscription_id
                )
            self.repository.set_cancel_at_period_end(current.id)
        except Exception:
            logger.exception("Failed to cancel subscription")
            return ActionResult.fail("Failed to cancel the subscription", "unexpected")
        return ActionResult.ok()
