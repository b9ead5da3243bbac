"""Instant photo request endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from shutterhub.api.responses import caller_id, to_response
from shutterhub.api.schemas import (  # noqa: TC001
    CreateInstantRequestBody,
    GuestDecisionBody,
    RespondBody,
    StatusUpdateBody,
)
from shutterhub.domain.instant_photo import NewInstantPhotoRequest

if TYPE_CHECKING:
    from shutterhub.containers import AppContainer

router = APIRouter(prefix="/instant", tags=["instant"])


@router.post("/requests")
async def create_request(
    body: CreateInstantRequestBody, request: Request
) -> JSONResponse:
    """Create a request for the guest and start matching."""
    container: AppContainer = request.app.state.container
    result = container.request_service.create(
        NewInstantPhotoRequest(**body.model_dump())
    )
    return to_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/requests")
async def guest_history(
    guest_phone: str, request: Request, limit: int = 10
) -> JSONResponse:
    """Return the guest's recent requests."""
    container: AppContainer = request.app.state.container
    result = container.request_service.get_history_for_guest(guest_phone, limit)
    return to_response(result)


@router.get("/requests/{request_id}")
async def get_request(request_id: UUID, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(container.request_service.get_by_id(request_id))


@router.post("/requests/{request_id}/respond")
async def respond(
    request_id: UUID,
    body: RespondBody,
    request: Request,
    photographer_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Accept or decline a request as the calling photographer."""
    container: AppContainer = request.app.state.container
    result = container.acceptance_service.respond(
        request_id,
        photographer_id,
        body.response_type,
        decline_reason=body.decline_reason,
        estimated_arrival_time=body.estimated_arrival_time,
    )
    return to_response(result)


@router.post("/requests/{request_id}/approve")
async def approve(
    request_id: UUID, body: GuestDecisionBody, request: Request
) -> JSONResponse:
    """Confirm the photographer who accepted the request."""
    container: AppContainer = request.app.state.container
    return to_response(
        container.acceptance_service.approve_photographer(
            request_id, body.photographer_id
        )
    )


@router.post("/requests/{request_id}/reject")
async def reject(
    request_id: UUID, body: GuestDecisionBody, request: Request
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(
        container.acceptance_service.reject_photographer(
            request_id, body.photographer_id
        )
    )


@router.post("/requests/{request_id}/status")
async def update_status(
    request_id: UUID,
    body: StatusUpdateBody,
    request: Request,
    photographer_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Move a matched request forward as its photographer."""
    container: AppContainer = request.app.state.container
    return to_response(
        container.booking_service.update_request_status(
            request_id, photographer_id, body.status
        )
    )


@router.post("/requests/{request_id}/timeout")
async def check_timeout(request_id: UUID, request: Request) -> JSONResponse:
    """Reopen the request if its pending claim has timed out."""
    container: AppContainer = request.app.state.container
    return to_response(
        container.acceptance_service.check_photographer_timeout(request_id)
    )


@router.get("/usage")
async def guest_usage(guest_phone: str, request: Request) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(container.guest_usage_service.check_usage(guest_phone))


@router.get("/photographers/nearby")
async def nearby_photographers(  # noqa: PLR0913
    request: Request,
    latitude: float,
    longitude: float,
    radius_meters: int = 1000,
    request_type: str | None = None,
    max_budget: int | None = None,
    urgency: str = "normal",
) -> JSONResponse:
    """Search photographers around a point."""
    container: AppContainer = request.app.state.container
    result = container.matching_service.find_nearby_photographers(
        latitude,
        longitude,
        radius_meters=radius_meters,
        request_type=request_type,
        max_budget=max_budget,
        urgency=urgency,
    )
    return to_response(result)
