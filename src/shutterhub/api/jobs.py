"""Scheduler-invoked sweep endpoints with token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from shutterhub.api.responses import to_response

if TYPE_CHECKING:
    from shutterhub.containers import AppContainer

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _get_cron_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.cron_token


async def require_cron(
    x_cron_token: str | None = Header(default=None),
    cron_token: str = Depends(_get_cron_token),
) -> None:
    """Ensure requests carry the scheduler token."""
    if not x_cron_token or x_cron_token != cron_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/expire-requests", dependencies=[Depends(require_cron)])
async def expire_requests(request: Request) -> JSONResponse:
    """Expire requests past their expiry time."""
    container: AppContainer = request.app.state.container
    return to_response(container.request_service.expire_old_requests())


@router.post("/photographer-timeouts", dependencies=[Depends(require_cron)])
async def photographer_timeouts(request: Request) -> JSONResponse:
    """Reopen every request whose photographer claim timed out."""
    container: AppContainer = request.app.state.container
    return to_response(container.acceptance_service.check_photographer_timeout())


@router.post("/auto-confirm-escrow", dependencies=[Depends(require_cron)])
async def auto_confirm_escrow(request: Request) -> JSONResponse:
    """Release escrows whose delivery went unconfirmed past the deadline."""
    container: AppContainer = request.app.state.container
    return to_response(container.delivery_service.process_auto_confirmations())
