"""Update profile use case."""

from typing import Optional

from pydantic import BaseModel, Field

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.user.get_profile import ProfileResponse
from pal.domain.service import UserService
from pal.domain.value import SocialStyle


class UpdateProfileRequest(BaseModel):
    """Update profile request. Omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = None
    gender: Optional[list[str]] = None
    looking_to_meet: Optional[list[str]] = None
    social_style: Optional[SocialStyle] = None
    headline: Optional[str] = Field(default=None, max_length=150)
    about_me: Optional[str] = Field(default=None, max_length=2000)
    profile_picture: Optional[str] = None
    add_interests: list[str] = []
    remove_interests: list[str] = []


class UpdateProfileUseCase(BaseUseCase):
    """Use case for editing the session user's profile and interests."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> ProfileResponse:
        """Apply field edits, then interest removals, then additions.

        Raises:
            NotFoundError: If the session user has no profile
            ValidationError: If a value is invalid or an interest is duplicated
        """
        changes = request.model_dump(
            exclude={"add_interests", "remove_interests"}, exclude_none=True
        )
        if changes:
            user = await self.user_service.update_profile(**changes)
        else:
            user = await self.user_service.get_current_user()

        for name in request.remove_interests:
            user = await self.user_service.remove_interest(name)
        for name in request.add_interests:
            user = await self.user_service.add_interest(name)

        return ProfileResponse.from_user(user)
