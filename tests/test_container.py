"""Tests for container wiring."""

from shutterhub import containers
from shutterhub.adapters.stripe_payments_client import StripePaymentsClient
from shutterhub.containers import build_container


def test_build_container_creates_services(settings, monkeypatch) -> None:
    created: list[tuple[str, str]] = []

    def fake_create_client(url: str, key: str) -> object:
        created.append((url, key))
        return object()

    monkeypatch.setattr(containers, "create_client", fake_create_client)

    container = build_container(settings)

    assert created == [("https://example.supabase.co", "service-key")]
    assert container.settings is settings
    assert container.acceptance_service.max_attempts == 3
    assert container.guest_usage_service.monthly_limit == 3
    payments_client = container.escrow_service.payments_client
    assert isinstance(payments_client, StripePaymentsClient)
    assert payments_client.api_key == "sk_test_123"
    delivery_service = container.delivery_service
    assert delivery_service.payments_client is payments_client
    escrow_service = container.escrow_service
    assert delivery_service.escrow_repository is escrow_service.escrow_repository
