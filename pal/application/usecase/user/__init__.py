"""User use cases."""

from .create_profile import CreateProfileRequest, CreateProfileUseCase
from .get_profile import GetProfileRequest, GetProfileUseCase, ProfileResponse
from .update_profile import UpdateProfileRequest, UpdateProfileUseCase
from .upgrade_to_premium import QuotaResponse, UpgradeToPremiumUseCase

__all__ = [
    "CreateProfileRequest",
    "CreateProfileUseCase",
    "GetProfileRequest",
    "GetProfileUseCase",
    "ProfileResponse",
    "QuotaResponse",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
    "UpgradeToPremiumUseCase",
]
