"""Plan-limited content creation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from shutterhub.api.responses import caller_id, to_response
from shutterhub.api.schemas import PhotobookBody, PhotoSessionBody  # noqa: TC001
from shutterhub.domain.content import NewPhotobook, NewPhotoSession
from shutterhub.domain.results import ActionResult

if TYPE_CHECKING:
    from shutterhub.containers import AppContainer

router = APIRouter(tags=["content"])


@router.post("/photo-sessions")
async def create_photo_session(
    body: PhotoSessionBody,
    request: Request,
    user_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Create a photo session within the organizer's plan quota."""
    container: AppContainer = request.app.state.container
    result = container.photo_session_service.create_session(
        user_id, NewPhotoSession(**body.model_dump())
    )
    return to_response(result, success_status=status.HTTP_201_CREATED)


@router.post("/photobooks")
async def create_photobook(
    body: PhotobookBody,
    request: Request,
    user_id: UUID = Depends(caller_id),
) -> JSONResponse:
    container: AppContainer = request.app.state.container
    result = container.photobook_service.create_photobook(
        user_id, NewPhotobook(**body.model_dump())
    )
    return to_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/feature-limits/{feature_name}")
async def feature_limit(
    feature_name: str,
    request: Request,
    current_usage: int = 0,
    user_id: UUID = Depends(caller_id),
) -> JSONResponse:
    """Report the caller's quota for a feature."""
    container: AppContainer = request.app.state.container
    check = container.feature_limit_gate.check_limit(
        user_id, feature_name, current_usage
    )
    return to_response(ActionResult.ok(check))
