"""Upgrade to premium use case."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.domain.service import UserService


class QuotaResponse(BaseModel):
    """Super-like allowance of the session user."""

    is_premium: bool
    super_likes_remaining: int
    last_reset_date: Optional[date]


class UpgradeToPremiumUseCase(BaseUseCase):
    """Use case for upgrading the session user to premium.

    Payment is handled outside this service.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: None = None) -> QuotaResponse:
        await self.user_service.upgrade_to_premium()
        quota = await self.user_service.get_quota_status()
        return QuotaResponse(
            is_premium=quota.is_premium,
            super_likes_remaining=quota.remaining,
            last_reset_date=quota.last_reset_date,
        )
