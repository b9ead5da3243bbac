"""Presence and inbox endpoints for the calling photographer."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse  # noqa: TC002

from shutterhub.api.responses import caller_id, to_response
from shutterhub.api.schemas import LocationBody, OnlineBody  # noqa: TC001
from shutterhub.domain.instant_photo import LocationUpdate

if TYPE_CHECKING:
    from shutterhub.containers import AppContainer

router = APIRouter(prefix="/photographers/me", tags=["photographers"])


@router.put("/location")
async def update_location(
    body: LocationBody,
    request: Request,
    photographer_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Store the photographer's latest position."""
    container: AppContainer = request.app.state.container
    result = container.presence_service.update_location(
        photographer_id, LocationUpdate(**body.model_dump())
    )
    return to_response(result)


@router.post("/online")
async def set_online(
    body: OnlineBody,
    request: Request,
    photographer_id: UUID = Depends(caller_id),
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    result = container.presence_service.set_online(
        photographer_id, body.online, body.latitude, body.longitude
    )
    return to_response(result)


@router.get("/online")
async def is_online(
    request: Request, photographer_id: UUID = Depends(caller_id)
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    return to_response(container.presence_service.is_online(photographer_id))


@router.get("/requests")
async def inbox(
    request: Request, photographer_id: UUID = Depends(caller_id)
) -> JSONResponse:
    """Return claimed requests plus nearby open ones."""
    container: AppContainer = request.app.state.container
    return to_response(container.request_service.list_for_photographer(photographer_id))
