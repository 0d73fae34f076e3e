"""Create profile use case (signup completion)."""

from typing import Optional

from pydantic import BaseModel, Field

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.user.get_profile import ProfileResponse
from pal.domain.service import UserService
from pal.domain.value import SocialStyle


class CreateProfileRequest(BaseModel):
    """Create profile request."""

    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    gender: list[str] = []
    looking_to_meet: list[str] = []
    social_style: SocialStyle = SocialStyle.AMBIVERT
    interests: list[str] = []
    headline: Optional[str] = Field(default=None, max_length=150)
    about_me: Optional[str] = Field(default=None, max_length=2000)
    profile_picture: Optional[str] = None


class CreateProfileUseCase(BaseUseCase):
    """Use case for completing onboarding for the session user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: CreateProfileRequest) -> ProfileResponse:
        """Create the profile.

        Raises:
            ValidationError: If the profile exists or the interests repeat
        """
        user = await self.user_service.create_profile(**request.model_dump())
        return ProfileResponse.from_user(user)
