"""Account API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentSession
from api.v1.dependencies import get_profile_service
from api.v1.schemas.account import ProfileDetailResponse, ProfileResponse, ProfileUpdate
from api.v1.schemas.common import ErrorResponse
from core.rate_limit import limiter
from domain.entities.user import ProfileUpdateRequest, PublicProfile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/account", tags=["account"])


def _to_response(profile: PublicProfile) -> ProfileDetailResponse:
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    session: CurrentSession,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the self-view of the authenticated account."""
    profile = await service.get_self(session.user_id)
    return _to_response(profile)


@router.post(
    "/updateProfile",
    response_model=ProfileDetailResponse,
    summary="Update name and/or about",
    responses={
        200: {"description": "Profile after the update"},
        400: {"model": ErrorResponse, "description": "FIRSTNAME_INVALID or ABOUT_TOO_LONG"},
        409: {"model": ErrorResponse, "description": "Profile changed concurrently"},
        502: {"model": ErrorResponse, "description": "User directory or update dispatch failed"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    body: ProfileUpdate,
    session: CurrentSession,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update first/last name and/or about.

    Fields equal to the stored values are not rewritten. A name change is
    pushed to the account's other sessions as ``updateUserName``.
    """
    profile = await service.update_profile(
        ProfileUpdateRequest(
            first_name=body.first_name,
            last_name=body.last_name,
            about=body.about,
        ),
        acting_user_id=session.user_id,
        session=session,
    )
    return _to_response(profile)
