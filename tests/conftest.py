"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from shutterhub.config import Settings
from shutterhub.containers import AppContainer
from shutterhub.domain.bookings import (
    DeliveryReview,
    EscrowPayment,
    FeeSplit,
    InstantBooking,
    NewPhotoDelivery,
    PhotoDelivery,
)
from shutterhub.domain.content import (
    NewPhotobook,
    NewPhotoSession,
    Photobook,
    PhotoSession,
)
from shutterhub.domain.instant_photo import (
    AutoMatchResult,
    InstantPhotoRequest,
    LocationUpdate,
    NearbyPhotographer,
    NewInstantPhotoRequest,
    PhotographerLocation,
    PhotographerResponse,
    RequestStatus,
    ResponseType,
)
from shutterhub.domain.subscriptions import (
    FeatureLimitCheck,
    SubscriptionPlan,
    UserSubscription,
)
from shutterhub.services.acceptance import AcceptanceService
from shutterhub.services.bookings import BookingRepository, BookingService
from shutterhub.services.cache import InMemoryCache
from shutterhub.services.deliveries import DeliveryRepository, DeliveryService
from shutterhub.services.feature_limits import FeatureLimitGate, FeatureLimitRepository
from shutterhub.services.guest_usage import GuestUsageRepository, GuestUsageService
from shutterhub.services.matching import MatchingRepository, MatchingService
from shutterhub.services.notifications import (
    Notification,
    NotificationRepository,
    NotificationService,
)
from shutterhub.services.payments import (
    EscrowRepository,
    EscrowService,
    PaymentIntent,
    PaymentsClient,
    StripeSubscription,
)
from shutterhub.services.photo_sessions import (
    PhotoSessionRepository,
    PhotoSessionService,
)
from shutterhub.services.photobooks import PhotobookRepository, PhotobookService
from shutterhub.services.presence import LocationRepository, PresenceService
from shutterhub.services.requests import (
    RequestLifecycleService,
    RequestRepository,
    ResponseRepository,
)
from shutterhub.services.subscriptions import (
    SubscriptionRepository,
    SubscriptionService,
)

TOKYO_STATION = (35.681236, 139.767125)

_REQUEST_FIELDS = {item.name for item in fields(InstantPhotoRequest)}


def make_request(**overrides: object) -> InstantPhotoRequest:
    """Build a pending request near Tokyo Station."""
    now = datetime.now(tz=UTC)
    values: dict[str, object] = {
        "id": uuid4(),
        "status": RequestStatus.PENDING,
        "guest_name": "Aiko",
        "guest_phone": "+81-90-0000-0000",
        "location_lat": TOKYO_STATION[0],
        "location_lng": TOKYO_STATION[1],
        "request_type": "portrait",
        "urgency": "normal",
        "duration": 30,
        "budget": 5000,
        "created_at": now,
        "expires_at": now + timedelta(days=3),
    }
    values.update(overrides)
    return InstantPhotoRequest(**values)  # type: ignore[arg-type]


def new_request_data(**overrides: object) -> NewInstantPhotoRequest:
    values: dict[str, object] = {
        "guest_name": "Aiko",
        "guest_phone": "+81-90-0000-0000",
        "location_lat": TOKYO_STATION[0],
        "location_lng": TOKYO_STATION[1],
        "request_type": "portrait",
        "urgency": "normal",
        "duration": 30,
        "budget": 5000,
    }
    values.update(overrides)
    return NewInstantPhotoRequest(**values)  # type: ignore[arg-type]


@dataclass
class InMemoryRequestRepository(RequestRepository):
    """In-memory request repository with conditional updates."""

    requests: dict[UUID, InstantPhotoRequest] = field(default_factory=dict)
    cas_calls: int = 0
    expire_calls: int = 0

    def add(self, request: InstantPhotoRequest) -> InstantPhotoRequest:
        self.requests[request.id] = request
        return request

    def create_request(
        self, data: NewInstantPhotoRequest, expires_at: datetime
    ) -> InstantPhotoRequest:
        request = InstantPhotoRequest(
            id=uuid4(),
            status=RequestStatus.PENDING,
            created_at=datetime.now(tz=UTC),
            expires_at=expires_at,
            **{item.name: getattr(data, item.name) for item in fields(data)},
        )
        return self.add(request)

    def get_request(self, request_id: UUID) -> InstantPhotoRequest | None:
        return self.requests.get(request_id)

    def list_by_guest_phone(
        self, guest_phone: str, limit: int
    ) -> list[InstantPhotoRequest]:
        matches = [r for r in self.requests.values() if r.guest_phone == guest_phone]
        return _newest_first(matches)[:limit]

    def list_claimed_by(
        self, photographer_id: UUID, limit: int
    ) -> list[InstantPhotoRequest]:
        matches = [
            r
            for r in self.requests.values()
            if photographer_id
            in {r.pending_photographer_id, r.matched_photographer_id}
        ]
        return _newest_first(matches)[:limit]

    def list_by_status(
        self, status: RequestStatus, limit: int
    ) -> list[InstantPhotoRequest]:
        matches = [r for r in self.requests.values() if r.status == status]
        return _newest_first(matches)[:limit]

    def compare_and_set(
        self,
        request_id: UUID,
        expected: dict[str, object],
        changes: dict[str, object],
    ) -> InstantPhotoRequest | None:
        self.cas_calls += 1
        current = self.requests.get(request_id)
        if current is None:
            return None
        for column, value in expected.items():
            if getattr(current, column) != value:
                return None
        known = {key: value for key, value in changes.items() if key in _REQUEST_FIELDS}
        updated = replace(current, **known)
        self.requests[request_id] = updated
        return updated

    def revert_expired_claims(self, now: datetime) -> int:
        count = 0
        for request in list(self.requests.values()):
            if (
                request.status == RequestStatus.PHOTOGRAPHER_ACCEPTED
                and request.photographer_timeout_at is not None
                and request.photographer_timeout_at < now
            ):
                self.requests[request.id] = replace(
                    request,
                    status=RequestStatus.PENDING,
                    pending_photographer_id=None,
                    photographer_accepted_at=None,
                    photographer_timeout_at=None,
                )
                count += 1
        return count

    def expire_old_requests(self) -> int:
        self.expire_calls += 1
        now = datetime.now(tz=UTC)
        count = 0
        for request in list(self.requests.values()):
            if request.status == RequestStatus.PENDING and request.expires_at < now:
                self.requests[request.id] = replace(
                    request, status=RequestStatus.CANCELLED
                )
                count += 1
        return count


@dataclass
class RacingRequestRepository(InMemoryRequestRepository):
    """Runs queued writes from a competing caller just before each guarded update."""

    interleaved: list[Callable[[InMemoryRequestRepository], None]] = field(
        default_factory=list
    )

    def compare_and_set(
        self,
        request_id: UUID,
        expected: dict[str, object],
        changes: dict[str, object],
    ) -> InstantPhotoRequest | None:
        if self.interleaved:
            self.interleaved.pop(0)(self)
        return super().compare_and_set(request_id, expected, changes)


def _newest_first(requests: list[InstantPhotoRequest]) -> list[InstantPhotoRequest]:
    return sorted(requests, key=lambda item: item.created_at, reverse=True)


@dataclass
class InMemoryResponseRepository(ResponseRepository):
    """In-memory photographer responses keyed by request and photographer."""

    responses: dict[tuple[UUID, UUID], PhotographerResponse] = field(
        default_factory=dict
    )
    fail_declined_lookup: bool = False

    def get_response(
        self, request_id: UUID, photographer_id: UUID
    ) -> PhotographerResponse | None:
        return self.responses.get((request_id, photographer_id))

    def create_response(  # noqa: PLR0913
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
        estimated_arrival_time: int | None = None,
    ) -> None:
        self.responses[(request_id, photographer_id)] = PhotographerResponse(
            id=uuid4(),
            request_id=request_id,
            photographer_id=photographer_id,
            response_type=response_type,
            decline_reason=decline_reason,
            estimated_arrival_time=estimated_arrival_time,
        )

    def update_response(
        self,
        request_id: UUID,
        photographer_id: UUID,
        response_type: ResponseType,
        decline_reason: str | None = None,
    ) -> None:
        existing = self.responses.get((request_id, photographer_id))
        if existing is None:
            return
        self.responses[(request_id, photographer_id)] = replace(
            existing, response_type=response_type, decline_reason=decline_reason
        )

    def list_declined_request_ids(self, photographer_id: UUID) -> set[UUID]:
        if self.fail_declined_lookup:
            raise RuntimeError("responses unavailable")
        return {
            response.request_id
            for response in self.responses.values()
            if response.photographer_id == photographer_id
            and response.response_type == ResponseType.DECLINE
        }


@dataclass
class InMemoryLocationRepository(LocationRepository):
    """In-memory photographer locations."""

    locations: dict[UUID, PhotographerLocation] = field(default_factory=dict)

    def get_location(self, photographer_id: UUID) -> PhotographerLocation | None:
        return self.locations.get(photographer_id)

    def upsert_location(
        self, photographer_id: UUID, update: LocationUpdate
    ) -> PhotographerLocation:
        location = PhotographerLocation(
            photographer_id=photographer_id,
            latitude=update.latitude,
            longitude=update.longitude,
            is_online=update.is_online,
            accepting_requests=update.accepting_requests,
            response_radius=update.response_radius,
            accuracy=update.accuracy,
            available_until=update.available_until,
            instant_rates=update.instant_rates or {},
        )
        self.locations[photographer_id] = location
        return location

    def delete_location(self, photographer_id: UUID) -> None:
        self.locations.pop(photographer_id, None)


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory bookings."""

    bookings: dict[UUID, InstantBooking] = field(default_factory=dict)
    deliveries: dict[UUID, tuple[int, str | None]] = field(default_factory=dict)
    reviews: dict[UUID, tuple[int | None, str | None]] = field(default_factory=dict)
    fail_create: bool = False

    def get_booking(self, booking_id: UUID) -> InstantBooking | None:
        return self.bookings.get(booking_id)

    def get_booking_for_request(self, request_id: UUID) -> InstantBooking | None:
        for booking in self.bookings.values():
            if booking.request_id == request_id:
                return booking
        return None

    def create_booking(
        self,
        request_id: UUID,
        photographer_id: UUID,
        split: FeeSplit,
        start_time: datetime | None,
    ) -> InstantBooking:
        if self.fail_create:
            raise RuntimeError("Failed to create booking")
        booking = InstantBooking(
            id=uuid4(),
            request_id=request_id,
            photographer_id=photographer_id,
            total_amount=split.total_amount,
            platform_fee=split.platform_fee,
            photographer_earnings=split.photographer_earnings,
            payment_status="pending",
            start_time=start_time,
            created_at=datetime.now(tz=UTC),
        )
        self.bookings[booking.id] = booking
        return booking

    def mark_paid(self, booking_id: UUID) -> InstantBooking | None:
        booking = self.bookings.get(booking_id)
        if booking is None:
            return None
        paid = replace(booking, payment_status="paid")
        self.bookings[booking_id] = paid
        return paid

    def record_delivery(
        self,
        booking_id: UUID,
        photo_count: int,
        delivery_url: str | None,
        end_time: datetime,
    ) -> None:
        self.deliveries[booking_id] = (photo_count, delivery_url)

    def record_review(
        self, booking_id: UUID, rating: int | None, review: str | None
    ) -> None:
        self.reviews[booking_id] = (rating, review)
        self.mark_paid(booking_id)


@dataclass
class InMemoryGuestUsageRepository(GuestUsageRepository):
    """In-memory guest usage rows."""

    rows: list[dict[str, object]] = field(default_factory=list)
    fail_count: bool = False
    fail_record: bool = False

    def count_usage(self, guest_phone: str, usage_month: str) -> int:
        if self.fail_count:
            raise RuntimeError("usage check failed")
        return sum(
            1
            for row in self.rows
            if row["guest_phone"] == guest_phone and row["usage_month"] == usage_month
        )

    def record_usage(
        self,
        guest_phone: str,
        guest_email: str | None,
        request_id: UUID,
        usage_month: str,
    ) -> None:
        if self.fail_record:
            raise RuntimeError("usage insert failed")
        self.rows.append(
            {
                "guest_phone": guest_phone,
                "guest_email": guest_email,
                "request_id": request_id,
                "usage_month": usage_month,
            }
        )


@dataclass
class FakeMatchingRepository(MatchingRepository):
    """Matching procedures returning canned results."""

    result: AutoMatchResult | None = field(
        default_factory=lambda: AutoMatchResult(message="No available photographers")
    )
    nearby: list[NearbyPhotographer] = field(default_factory=list)
    matched: list[UUID] = field(default_factory=list)
    fail: bool = False

    def auto_match_request(self, request_id: UUID) -> AutoMatchResult | None:
        if self.fail:
            raise RuntimeError("rpc failed")
        self.matched.append(request_id)
        return self.result

    def find_nearby_photographers(  # noqa: PLR0913
        self,
        latitude: float,
        longitude: float,
        radius_meters: int,
        request_type: str | None,
        max_budget: int | None,
        urgency: str,
    ) -> list[NearbyPhotographer]:
        if self.fail:
            raise RuntimeError("rpc failed")
        return [p for p in self.nearby if p.distance_meters <= radius_meters]


@dataclass
class InMemoryNotificationRepository(NotificationRepository):
    """Records notifications instead of storing them."""

    display_names: dict[UUID, str] = field(default_factory=dict)
    notifications: list[Notification] = field(default_factory=list)
    fail_create: bool = False

    def get_display_name(self, user_id: UUID) -> str | None:
        return self.display_names.get(user_id)

    def create_notification(self, notification: Notification) -> None:
        if self.fail_create:
            raise RuntimeError("notification insert failed")
        self.notifications.append(notification)


@dataclass
class FakeFeatureLimitRepository(FeatureLimitRepository):
    """Feature limit procedures with a configurable plan limit."""

    limit: int | None = 5
    plan_name: str = "Pro"
    fail_check: bool = False
    recorded: list[tuple[UUID, str, int]] = field(default_factory=list)

    def check_feature_limit(
        self, user_id: UUID, feature_name: str, current_usage: int
    ) -> FeatureLimitCheck | None:
        if self.fail_check:
            raise RuntimeError("rpc failed")
        if self.limit is None:
            return None
        return FeatureLimitCheck(
            allowed=current_usage < self.limit,
            current_usage=current_usage,
            limit=self.limit,
            remaining=max(0, self.limit - current_usage),
            plan_name=self.plan_name,
        )

    def record_feature_usage(
        self, user_id: UUID, feature_name: str, amount: int
    ) -> None:
        self.recorded.append((user_id, feature_name, amount))


@dataclass
class InMemoryPhotoSessionRepository(PhotoSessionRepository):
    """In-memory photo sessions and profile types."""

    user_types: dict[UUID, str] = field(default_factory=dict)
    sessions: list[PhotoSession] = field(default_factory=list)

    def get_user_type(self, user_id: UUID) -> str | None:
        return self.user_types.get(user_id)

    def count_sessions(self, organizer_id: UUID) -> int:
        return sum(1 for s in self.sessions if s.organizer_id == organizer_id)

    def create_session(
        self, organizer_id: UUID, data: NewPhotoSession
    ) -> PhotoSession:
        session = PhotoSession(
            id=uuid4(),
            organizer_id=organizer_id,
            title=data.title,
            location=data.location,
            start_time=data.start_time,
            end_time=data.end_time,
            max_participants=data.max_participants,
            price_per_person=data.price_per_person,
            is_published=data.is_published,
        )
        self.sessions.append(session)
        return session


@dataclass
class InMemoryPhotobookRepository(PhotobookRepository):
    photobooks: list[Photobook] = field(default_factory=list)

    def count_photobooks(self, user_id: UUID) -> int:
        return sum(1 for p in self.photobooks if p.user_id == user_id)

    def create_photobook(self, user_id: UUID, data: NewPhotobook) -> Photobook:
        photobook = Photobook(
            id=uuid4(),
            user_id=user_id,
            title=data.title,
            photobook_type=data.photobook_type,
        )
        self.photobooks.append(photobook)
        return photobook


@dataclass
class InMemoryEscrowRepository(EscrowRepository):
    """In-memory escrow payments."""

    escrows: dict[UUID, EscrowPayment] = field(default_factory=dict)
    disputes: dict[UUID, str] = field(default_factory=dict)

    def get_escrow_for_booking(self, booking_id: UUID) -> EscrowPayment | None:
        for escrow in self.escrows.values():
            if escrow.booking_id == booking_id:
                return escrow
        return None

    def upsert_escrow(
        self,
        existing_id: UUID | None,
        booking: InstantBooking,
        payment_intent_id: str,
        auto_confirm_at: datetime,
    ) -> EscrowPayment:
        escrow = EscrowPayment(
            id=existing_id or uuid4(),
            booking_id=booking.id,
            stripe_payment_intent_id=payment_intent_id,
            total_amount=booking.total_amount,
            platform_fee=booking.platform_fee,
            photographer_earnings=booking.photographer_earnings,
            escrow_status="pending",
            delivery_status="waiting",
            auto_confirm_at=auto_confirm_at,
        )
        self.escrows[escrow.id] = escrow
        return escrow

    def mark_escrowed(
        self, payment_intent_id: str, escrowed_at: datetime
    ) -> EscrowPayment | None:
        for escrow in self.escrows.values():
            if escrow.stripe_payment_intent_id == payment_intent_id:
                funded = replace(
                    escrow, escrow_status="escrowed", escrowed_at=escrowed_at
                )
                self.escrows[escrow.id] = funded
                return funded
        return None

    def mark_delivered(
        self, booking_id: UUID, delivered_at: datetime
    ) -> EscrowPayment | None:
        escrow = self.get_escrow_for_booking(booking_id)
        if escrow is None:
            return None
        delivered = replace(
            escrow, delivery_status="delivered", delivered_at=delivered_at
        )
        self.escrows[escrow.id] = delivered
        return delivered

    def complete_escrow(
        self, escrow_id: UUID, completed_at: datetime
    ) -> EscrowPayment | None:
        escrow = self.escrows.get(escrow_id)
        if escrow is None or escrow.escrow_status != "escrowed":
            return None
        completed = replace(
            escrow,
            escrow_status="completed",
            delivery_status="confirmed",
            completed_at=completed_at,
        )
        self.escrows[escrow_id] = completed
        return completed

    def mark_disputed(
        self, escrow_id: UUID, reason: str, disputed_at: datetime
    ) -> None:
        self.escrows[escrow_id] = replace(
            self.escrows[escrow_id], escrow_status="disputed"
        )
        self.disputes[escrow_id] = reason

    def list_due_for_auto_confirm(
        self, now: datetime, limit: int
    ) -> list[EscrowPayment]:
        due = [
            escrow
            for escrow in self.escrows.values()
            if escrow.escrow_status == "escrowed"
            and escrow.delivery_status == "delivered"
            and escrow.auto_confirm_at is not None
            and escrow.auto_confirm_at <= now
        ]
        return due[:limit]


@dataclass
class InMemoryDeliveryRepository(DeliveryRepository):
    """In-memory photo deliveries and reviews."""

    deliveries: dict[UUID, PhotoDelivery] = field(default_factory=dict)
    confirmed: dict[UUID, datetime] = field(default_factory=dict)
    reviews: dict[UUID, DeliveryReview] = field(default_factory=dict)
    fail_save: bool = False

    def save_delivery(
        self,
        booking_id: UUID,
        data: NewPhotoDelivery,
        delivered_at: datetime,
        download_expires_at: datetime,
    ) -> PhotoDelivery:
        if self.fail_save:
            raise RuntimeError("Failed to save photo delivery")
        delivery = PhotoDelivery(
            id=uuid4(),
            booking_id=booking_id,
            delivery_method=data.delivery_method,
            photo_count=data.photo_count,
            delivery_url=data.delivery_url,
            external_url=data.external_url,
            photographer_message=data.photographer_message,
            delivered_at=delivered_at,
            download_expires_at=download_expires_at,
        )
        self.deliveries[booking_id] = delivery
        return delivery

    def mark_confirmed(self, booking_id: UUID, confirmed_at: datetime) -> None:
        self.confirmed[booking_id] = confirmed_at

    def create_review(self, booking_id: UUID, review: DeliveryReview) -> None:
        self.reviews[booking_id] = review


@dataclass
class FakePaymentsClient(PaymentsClient):
    """Payments client recording calls instead of reaching Stripe."""

    customers: dict[UUID, str] = field(default_factory=dict)
    intents: list[tuple[int, str, dict[str, str]]] = field(default_factory=list)
    subscriptions: list[tuple[str, str]] = field(default_factory=list)
    cancelled: list[str] = field(default_factory=list)
    captured: list[str] = field(default_factory=list)
    fail_capture_for: set[str] = field(default_factory=set)
    fail: bool = False

    def find_customer(self, user_id: UUID) -> str | None:
        return self.customers.get(user_id)

    def create_customer(self, user_id: UUID, email: str, name: str | None) -> str:
        if self.fail:
            raise RuntimeError("stripe unavailable")
        customer_id = f"cus_{len(self.customers) + 1}"
        self.customers[user_id] = customer_id
        return customer_id

    def create_subscription(
        self, customer_id: str, price_id: str, metadata: dict[str, str]
    ) -> StripeSubscription:
        self.subscriptions.append((customer_id, price_id))
        return StripeSubscription(
            id=f"sub_{len(self.subscriptions)}",
            status="incomplete",
            client_secret="pi_secret_sub",
        )

    def cancel_subscription_at_period_end(self, subscription_id: str) -> None:
        self.cancelled.append(subscription_id)

    def create_escrow_intent(
        self, amount: int, currency: str, metadata: dict[str, str]
    ) -> PaymentIntent:
        if self.fail:
            raise RuntimeError("stripe unavailable")
        self.intents.append((amount, currency, metadata))
        return PaymentIntent(
            id=f"pi_{len(self.intents)}", client_secret=f"pi_{len(self.intents)}_secret"
        )

    def capture_payment_intent(self, payment_intent_id: str) -> None:
        if self.fail or payment_intent_id in self.fail_capture_for:
            raise RuntimeError("stripe unavailable")
        self.captured.append(payment_intent_id)


@dataclass
class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory plans and subscriptions."""

    plans: list[SubscriptionPlan] = field(default_factory=list)
    subscriptions: dict[UUID, UserSubscription] = field(default_factory=dict)
    plan_queries: int = 0

    def list_plans(self, user_type: str) -> list[SubscriptionPlan]:
        self.plan_queries += 1
        return [plan for plan in self.plans if plan.user_type == user_type]

    def get_plan(self, plan_id: str) -> SubscriptionPlan | None:
        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        return None

    def get_active_subscription(self, user_id: UUID) -> UserSubscription | None:
        subscription = self.subscriptions.get(user_id)
        if subscription is None or subscription.status != "active":
            return None
        return subscription

    def save_subscription(
        self,
        user_id: UUID,
        plan_id: str,
        customer_id: str,
        subscription: StripeSubscription,
    ) -> UserSubscription:
        saved = UserSubscription(
            id=uuid4(),
            user_id=user_id,
            plan_id=plan_id,
            status=subscription.status,
            stripe_subscription_id=subscription.id,
            stripe_customer_id=customer_id,
        )
        self.subscriptions[user_id] = saved
        return saved

    def set_cancel_at_period_end(self, subscription_id: UUID) -> None:
        for user_id, subscription in self.subscriptions.items():
            if subscription.id == subscription_id:
                self.subscriptions[user_id] = replace(
                    subscription, cancel_at_period_end=True
                )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        stripe_secret_key="sk_test_123",
        cron_token="cron-token",
    )


@pytest.fixture
def request_repository() -> InMemoryRequestRepository:
    return InMemoryRequestRepository()


@pytest.fixture
def response_repository() -> InMemoryResponseRepository:
    return InMemoryResponseRepository()


@pytest.fixture
def location_repository() -> InMemoryLocationRepository:
    return InMemoryLocationRepository()


@pytest.fixture
def booking_repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def notification_repository() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


@pytest.fixture
def guest_usage_repository() -> InMemoryGuestUsageRepository:
    return InMemoryGuestUsageRepository()


@pytest.fixture
def matching_repository() -> FakeMatchingRepository:
    return FakeMatchingRepository()


@pytest.fixture
def escrow_repository() -> InMemoryEscrowRepository:
    return InMemoryEscrowRepository()


@pytest.fixture
def delivery_repository() -> InMemoryDeliveryRepository:
    return InMemoryDeliveryRepository()


@pytest.fixture
def payments_client() -> FakePaymentsClient:
    return FakePaymentsClient()


@pytest.fixture
def booking_service(
    booking_repository: InMemoryBookingRepository,
    request_repository: InMemoryRequestRepository,
) -> BookingService:
    return BookingService(booking_repository, request_repository)


@pytest.fixture
def acceptance_service(
    request_repository: InMemoryRequestRepository,
    response_repository: InMemoryResponseRepository,
    booking_service: BookingService,
    notification_repository: InMemoryNotificationRepository,
) -> AcceptanceService:
    return AcceptanceService(
        request_repository=request_repository,
        response_repository=response_repository,
        booking_service=booking_service,
        notification_service=NotificationService(notification_repository),
    )


@pytest.fixture
def request_service(
    request_repository: InMemoryRequestRepository,
    response_repository: InMemoryResponseRepository,
    location_repository: InMemoryLocationRepository,
    guest_usage_repository: InMemoryGuestUsageRepository,
    matching_repository: FakeMatchingRepository,
) -> RequestLifecycleService:
    return RequestLifecycleService(
        request_repository=request_repository,
        response_repository=response_repository,
        location_repository=location_repository,
        guest_usage_service=GuestUsageService(guest_usage_repository),
        matching_service=MatchingService(matching_repository),
    )


@pytest.fixture
def delivery_service(  # noqa: PLR0913
    delivery_repository: InMemoryDeliveryRepository,
    escrow_repository: InMemoryEscrowRepository,
    booking_repository: InMemoryBookingRepository,
    request_repository: InMemoryRequestRepository,
    payments_client: FakePaymentsClient,
    notification_repository: InMemoryNotificationRepository,
) -> DeliveryService:
    return DeliveryService(
        repository=delivery_repository,
        escrow_repository=escrow_repository,
        booking_repository=booking_repository,
        request_repository=request_repository,
        payments_client=payments_client,
        notification_service=NotificationService(notification_repository),
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    request_service: RequestLifecycleService,
    acceptance_service: AcceptanceService,
    booking_service: BookingService,
    booking_repository: InMemoryBookingRepository,
    request_repository: InMemoryRequestRepository,
    location_repository: InMemoryLocationRepository,
    escrow_repository: InMemoryEscrowRepository,
    payments_client: FakePaymentsClient,
    delivery_service: DeliveryService,
) -> AppContainer:
    feature_limit_gate = FeatureLimitGate(FakeFeatureLimitRepository())
    return AppContainer(
        settings=settings,
        guest_usage_service=request_service.guest_usage_service,
        matching_service=request_service.matching_service,
        presence_service=PresenceService(location_repository),
        request_service=request_service,
        booking_service=booking_service,
        acceptance_service=acceptance_service,
        feature_limit_gate=feature_limit_gate,
        photo_session_service=PhotoSessionService(
            InMemoryPhotoSessionRepository(), feature_limit_gate
        ),
        photobook_service=PhotobookService(
            InMemoryPhotobookRepository(), feature_limit_gate
        ),
        escrow_service=EscrowService(
            escrow_repository=escrow_repository,
            booking_repository=booking_repository,
            request_repository=request_repository,
            payments_client=payments_client,
        ),
        delivery_service=delivery_service,
        subscription_service=SubscriptionService(
            repository=InMemorySubscriptionRepository(),
            payments_client=payments_client,
            cache=InMemoryCache(),
        ),
    )
