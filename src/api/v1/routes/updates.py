"""Updates API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentSession
from api.v1.dependencies import get_update_service
from api.v1.schemas.updates import UpdateResponse, UpdatesDifferenceResponse
from core.rate_limit import limiter
from domain.services.update_service import DIFFERENCE_LIMIT_MAX, UpdateService

router = APIRouter(prefix="/updates", tags=["updates"])


@router.get(
    "/difference",
    response_model=UpdatesDifferenceResponse,
    summary="Get updates missed by this session",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_difference(
    request: Request,
    session: CurrentSession,
    pts: int = Query(0, ge=0, description="Last pts this session has seen"),
    limit: int = Query(50, ge=1, le=DIFFERENCE_LIMIT_MAX),
    service: UpdateService = Depends(get_update_service),
) -> UpdatesDifferenceResponse:
    """Get account updates after ``pts``, excluding ones this session caused."""
    difference = await service.get_difference(
        account_id=session.user_id,
        session_key=session.session_key,
        after_pts=pts,
        limit=limit,
    )
    return UpdatesDifferenceResponse(
        account_id=session.user_id,
        updates=[UpdateResponse.model_validate(u) for u in difference.updates],
        state_pts=difference.state_pts,
    )
