"""Stripe implementation of the payments client."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

import stripe

from shutterhub.services.payments import (
    PaymentIntent,
    PaymentsClient,
    StripeSubscription,
)


@dataclass
class StripePaymentsClient(PaymentsClient):
    """Calls the Stripe API with a per-request secret key."""

    api_key: str

    def find_customer(self, user_id: UUID) -> str | None:
        """Return the customer tagged with this user id, if any."""
        result = stripe.Customer.search(
            query=f"metadata['user_id']:'{user_id}'",
            limit=1,
            api_key=self.api_key,
        )
        if not result.data:
            return None
        return result.data[0].id

    def create_customer(self, user_id: UUID, email: str, name: str | None) -> str:
        customer = stripe.Customer.create(
            email=email,
            name=name,
            metadata={"user_id": str(user_id)},
            api_key=self.api_key,
        )
        return customer.id

    def create_subscription(
        self, customer_id: str, price_id: str, metadata: dict[str, str]
    ) -> StripeSubscription:
        """Create a subscription that waits for the first invoice payment."""
        subscription = stripe.Subscription.create(
            customer=customer_id,
            items=[{"price": price_id}],
            payment_behavior="default_incomplete",
            payment_settings={"save_default_payment_method": "on_subscription"},
            expand=["latest_invoice.payment_intent"],
            metadata=metadata,
            api_key=self.api_key,
        )
        return StripeSubscription(
            id=subscription.id,
            status=subscription.status,
            client_secret=_invoice_client_secret(subscription),
            current_period_start=_from_timestamp(
                subscription.get("current_period_start")
            ),
            current_period_end=_from_timestamp(subscription.get("current_period_end")),
        )

    def cancel_subscription_at_period_end(self, subscription_id: str) -> None:
        stripe.Subscription.modify(
            subscription_id, cancel_at_period_end=True, api_key=self.api_key
        )

    def create_escrow_intent(
        self, amount: int, currency: str, metadata: dict[str, str]
    ) -> PaymentIntent:
        """Authorize now, capture after delivery is confirmed."""
        intent = stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            capture_method="manual",
            payment_method_types=["card"],
            metadata=metadata,
            api_key=self.api_key,
        )
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret)

    def capture_payment_intent(self, payment_intent_id: str) -> None:
        stripe.PaymentIntent.capture(payment_intent_id, api_key=self.api_key)


def _invoice_client_secret(subscription: stripe.Subscription) -> str | None:
    invoice = subscription.get("latest_invoice")
    if not invoice or isinstance(invoice, str):
        return None
    payment_intent = invoice.get("payment_intent")
    if not payment_intent or isinstance(payment_intent, str):
        return None
    return payment_intent.get("client_secret")


def _from_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, int):
        return datetime.fromtimestamp(raw, tz=UTC)
    return None
