"""Subscription and escrow payment endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from shutterhub.api.responses import caller_id, to_response
from shutterhub.api.schemas import (  # noqa: TC001
    CustomerBody,
    DeliveryBody,
    DeliveryReviewBody,
    EscrowBody,
    EscrowConfirmBody,
    SubscriptionBody,
)
from shutterhub.domain.bookings import DeliveryReview, NewPhotoDelivery

if TYPE_CHECKING:
    from shutterhub.containers import AppContainer

router = APIRouter(tags=["billing"])


@router.get("/subscriptions/plans")
async def list_plans(user_type: str, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(
        container.subscription_service.get_plans_for_user_type(user_type)
    )


@router.get("/subscriptions/me")
async def current_subscription(
    request: Request, user_id: UUID = Depends(caller_id)
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(container.subscription_service.get_current_subscription(user_id))


@router.post("/subscriptions/customer")
async def create_customer(
    body: CustomerBody, request: Request, user_id: UUID = Depends(caller_id)
) -> JSONResponse:
    """Return the caller's payment customer id, creating it if needed."""
    container: AppContainer = request.app.state.container
    return to_response(
        container.subscription_service.create_or_get_customer(
            user_id, body.email, body.name
        )
    )


@router.post("/subscriptions")
async def create_subscription(
    body: SubscriptionBody, request: Request, user_id: UUID = Depends(caller_id)
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    result = container.subscription_service.create_subscription(
        user_id, body.plan_id, body.email, body.name
    )
    return to_response(result, success_status=status.HTTP_201_CREATED)


@router.post("/subscriptions/cancel")
async def cancel_subscription(
    request: Request, user_id: UUID = Depends(caller_id)
) -> JSONResponse:
    """Stop renewal at the end of the current period."""
    container: AppContainer = request.app.state.container
    return to_response(container.subscription_service.cancel_subscription(user_id))


@router.post("/payments/escrow")
async def create_escrow(body: EscrowBody, request: Request) -> JSONResponse:
    """Start an escrow payment for a booking."""
    container: AppContainer = request.app.state.container
    result = container.escrow_service.create_escrow_payment(
        body.booking_id, body.guest_phone
    )
    return to_response(result, success_status=status.HTTP_201_CREATED)


@router.post("/payments/escrow/confirm")
async def confirm_escrow(body: EscrowConfirmBody, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(
        container.escrow_service.confirm_escrow_payment(body.payment_intent_id)
    )


@router.post("/payments/escrow/{booking_id}/deliver")
async def deliver_photos(
    booking_id: UUID,
    body: DeliveryBody,
    request: Request,
    photographer_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Hand the photos to the guest and start the confirmation window."""
    container: AppContainer = request.app.state.container
    return to_response(
        container.delivery_service.deliver_photos(
            booking_id, photographer_id, NewPhotoDelivery(**body.model_dump())
        )
    )


@router.post("/payments/escrow/{booking_id}/confirm-delivery")
async def confirm_delivery(
    booking_id: UUID, body: DeliveryReviewBody, request: Request
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(
        container.delivery_service.confirm_delivery(
            booking_id, DeliveryReview(**body.model_dump())
        )
    )
