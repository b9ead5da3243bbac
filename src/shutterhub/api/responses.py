"""Translation of service results into HTTP responses."""

from uuid import UUID

from fastapi import Header, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from shutterhub.domain.results import ActionResult

_STATUS_BY_CODE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "expired": status.HTTP_409_CONFLICT,
    "unexpected": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_response(
    result: ActionResult[object], success_status: int = status.HTTP_200_OK
) -> JSONResponse:
    """Render a result as ``{"success", "data"}`` or ``{"success", "error"}``."""
    if result.success:
        return JSONResponse(
            status_code=success_status,
            content=jsonable_encoder({"success": True, "data": result.data}),
        )
    return JSONResponse(
        status_code=_STATUS_BY_CODE.get(result.code or "", status.HTTP_400_BAD_REQUEST),
        content={"success": False, "error": result.error},
    )


async def caller_id(x_user_id: UUID = Header()) -> UUID:
    """Return the authenticated user id forwarded by the gateway."""
    return x_user_id
