"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from shutterhub.adapters.stripe_payments_client import StripePaymentsClient
from shutterhub.adapters.supabase_booking_repository import SupabaseBookingRepository
from shutterhub.adapters.supabase_delivery_repository import (
    SupabaseDeliveryRepository,
)
from shutterhub.adapters.supabase_escrow_repository import SupabaseEscrowRepository
from shutterhub.adapters.supabase_feature_limit_repository import (
    SupabaseFeatureLimitRepository,
)
from shutterhub.adapters.supabase_guest_usage_repository import (
    SupabaseGuestUsageRepository,
)
from shutterhub.adapters.supabase_location_repository import (
    SupabaseLocationRepository,
)
from shutterhub.adapters.supabase_matching_repository import (
    SupabaseMatchingRepository,
)
from shutterhub.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from shutterhub.adapters.supabase_photo_session_repository import (
    SupabasePhotoSessionRepository,
)
from shutterhub.adapters.supabase_photobook_repository import (
    SupabasePhotobookRepository,
)
from shutterhub.adapters.supabase_request_repository import SupabaseRequestRepository
from shutterhub.adapters.supabase_response_repository import (
    SupabaseResponseRepository,
)
from shutterhub.adapters.supabase_subscription_repository import (
    SupabaseSubscriptionRepository,
)
from shutterhub.config import Settings
from shutterhub.services.acceptance import AcceptanceService
from shutterhub.services.bookings import BookingService
from shutterhub.services.cache import InMemoryCache
from shutterhub.services.deliveries import DeliveryService
from shutterhub.services.feature_limits import FeatureLimitGate
from shutterhub.services.guest_usage import GuestUsageService
from shutterhub.services.matching import MatchingService
from shutterhub.services.notifications import NotificationService
from shutterhub.services.payments import EscrowService
from shutterhub.services.photo_sessions import PhotoSessionService
from shutterhub.services.photobooks import PhotobookService
from shutterhub.services.presence import PresenceService
from shutterhub.services.requests import RequestLifecycleService
from shutterhub.services.subscriptions import SubscriptionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    guest_usage_service: GuestUsageService
    matching_service: MatchingService
    presence_service: PresenceService
    request_service: RequestLifecycleService
    booking_service: BookingService
    acceptance_service: AcceptanceService
    feature_limit_gate: FeatureLimitGate
    photo_session_service: PhotoSessionService
    photobook_service: PhotobookService
    escrow_service: EscrowService
    delivery_service: DeliveryService
    subscription_service: SubscriptionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    request_repository = SupabaseRequestRepository(supabase_client)
    response_repository = SupabaseResponseRepository(supabase_client)
    location_repository = SupabaseLocationRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    payments_client = StripePaymentsClient(resolved_settings.stripe_secret_key)
    escrow_repository = SupabaseEscrowRepository(supabase_client)
    notification_service = NotificationService(
        SupabaseNotificationRepository(supabase_client)
    )

    guest_usage_service = GuestUsageService(
        SupabaseGuestUsageRepository(supabase_client),
        monthly_limit=resolved_settings.guest_monthly_limit,
    )
    matching_service = MatchingService(SupabaseMatchingRepository(supabase_client))
    presence_service = PresenceService(location_repository)
    request_service = RequestLifecycleService(
        request_repository=request_repository,
        response_repository=response_repository,
        location_repository=location_repository,
        guest_usage_service=guest_usage_service,
        matching_service=matching_service,
        request_ttl_days=resolved_settings.request_ttl_days,
    )
    booking_service = BookingService(
        repository=booking_repository,
        request_repository=request_repository,
        platform_fee_percent=resolved_settings.platform_fee_percent,
    )
    acceptance_service = AcceptanceService(
        request_repository=request_repository,
        response_repository=response_repository,
        booking_service=booking_service,
        notification_service=notification_service,
        timeout_minutes=resolved_settings.photographer_timeout_minutes,
        max_attempts=resolved_settings.accept_max_attempts,
    )
    feature_limit_gate = FeatureLimitGate(
        SupabaseFeatureLimitRepository(supabase_client)
    )
    escrow_service = EscrowService(
        escrow_repository=escrow_repository,
        booking_repository=booking_repository,
        request_repository=request_repository,
        payments_client=payments_client,
    )
    delivery_service = DeliveryService(
        repository=SupabaseDeliveryRepository(supabase_client),
        escrow_repository=escrow_repository,
        booking_repository=booking_repository,
        request_repository=request_repository,
        payments_client=payments_client,
        notification_service=notification_service,
    )
    subscription_service = SubscriptionService(
        repository=SupabaseSubscriptionRepository(supabase_client),
        payments_client=payments_client,
        cache=InMemoryCache(),
        plan_cache_ttl_seconds=resolved_settings.plan_cache_ttl_seconds,
    )

    return AppContainer(
        settings=resolved_settings,
        guest_usage_service=guest_usage_service,
        matching_service=matching_service,
        presence_service=presence_service,
        request_service=request_service,
        booking_service=booking_service,
        acceptance_service=acceptance_service,
        feature_limit_gate=feature_limit_gate,
        photo_session_service=PhotoSessionService(
            SupabasePhotoSessionRepository(supabase_client), feature_limit_gate
        ),
        photobook_service=PhotobookService(
            SupabasePhotobookRepository(supabase_client), feature_limit_gate
        ),
        escrow_service=escrow_service,
        delivery_service=delivery_service,
        subscription_service=subscription_service,
    )
