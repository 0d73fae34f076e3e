"""User profile routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status

from pal.application.usecase.user import (
    CreateProfileRequest,
    CreateProfileUseCase,
    GetProfileRequest,
    GetProfileUseCase,
    ProfileResponse,
    QuotaResponse,
    UpdateProfileRequest,
    UpdateProfileUseCase,
    UpgradeToPremiumUseCase,
)
from pal.domain.error import DomainError
from pal.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.post(
    "/me", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED
)
async def create_profile(
    request: CreateProfileRequest,
    create_profile_use_case: FromDishka[CreateProfileUseCase],
) -> ProfileResponse:
    """Create the profile for the authenticated identity.

    Raises:
        HTTPException: 422 if a profile already exists
    """
    try:
        return await create_profile_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    get_profile_use_case: FromDishka[GetProfileUseCase],
) -> ProfileResponse:
    """Get the current user's profile, including today's super-like count."""
    try:
        return await get_profile_use_case.execute(GetProfileRequest())
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    request: UpdateProfileRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
) -> ProfileResponse:
    """Update the current user's profile.

    Only provided fields are changed; interests are added and removed
    individually.
    """
    try:
        return await update_profile_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/me/premium", response_model=QuotaResponse)
async def upgrade_to_premium(
    upgrade_use_case: FromDishka[UpgradeToPremiumUseCase],
) -> QuotaResponse:
    """Upgrade the current user to premium (unlimited super-likes, undo)."""
    try:
        return await upgrade_use_case.execute()
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: UUID,
    get_profile_use_case: FromDishka[GetProfileUseCase],
) -> ProfileResponse:
    """Get another user's public profile."""
    try:
        return await get_profile_use_case.execute(
            GetProfileRequest(user_id=str(user_id))
        )
    except DomainError as e:
        raise to_http_exception(e)
