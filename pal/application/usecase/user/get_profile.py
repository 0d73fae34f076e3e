"""Get profile use case."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.domain.error import NotFoundError
from pal.domain.model import User
from pal.domain.service import UserService
from pal.domain.value import SocialStyle, UserId


class ProfileResponse(BaseModel):
    """User profile as returned by the API."""

    user_id: str
    name: str
    email: Optional[str]
    gender: list[str]
    looking_to_meet: list[str]
    social_style: SocialStyle
    interests: list[str]
    headline: Optional[str]
    about_me: Optional[str]
    profile_picture: Optional[str]
    verified: bool
    is_premium: bool
    super_likes_remaining: int
    last_reset_date: Optional[date]
    last_active: datetime

    @classmethod
    def from_user(
        cls, user: User, super_likes_remaining: Optional[int] = None
    ) -> "ProfileResponse":
        return cls(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            gender=user.gender,
            looking_to_meet=user.looking_to_meet,
            social_style=user.social_style,
            interests=[interest.name.root for interest in user.interests],
            headline=user.headline,
            about_me=user.about_me,
            profile_picture=user.profile_picture,
            verified=user.verified,
            is_premium=user.is_premium,
            super_likes_remaining=(
                user.super_likes_remaining
                if super_likes_remaining is None
                else super_likes_remaining
            ),
            last_reset_date=user.last_reset_date,
            last_active=user.last_active,
        )


class GetProfileRequest(BaseModel):
    """Get profile request. No user_id means the session user."""

    user_id: Optional[str] = None


class GetProfileUseCase(BaseUseCase):
    """Use case for reading a profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetProfileRequest) -> ProfileResponse:
        """Return the requested profile.

        The session user's own profile shows the effective super-like count
        for today.

        Raises:
            NotFoundError: If the profile does not exist
        """
        if request.user_id is None:
            user = await self.user_service.get_current_user()
            quota = await self.user_service.get_quota_status()
            return ProfileResponse.from_user(user, quota.remaining)

        user = await self.user_service.get_user_by_id(UserId(UUID(request.user_id)))
        if not user:
            raise NotFoundError("User", request.user_id)
        return ProfileResponse.from_user(user)
