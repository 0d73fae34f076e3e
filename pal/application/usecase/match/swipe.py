"""Swipe use case: like, super-like or skip a candidate."""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.match.list_matches import MatchItem
from pal.domain.service import MatchService, UserService
from pal.domain.value import UserId


class SwipeAction(str, Enum):
    LIKE = "like"
    SUPER_LIKE = "super_like"
    SKIP = "skip"


class SwipeRequest(BaseModel):
    """Swipe request."""

    target_user_id: str
    action: SwipeAction


class SwipeResponse(BaseModel):
    """Swipe response.

    ``match`` is None for a skip with no incoming proposal to decline.
    """

    match: Optional[MatchItem]
    super_likes_remaining: int


class SwipeUseCase(BaseUseCase):
    """Use case for reacting to a candidate."""

    def __init__(self, match_service: MatchService, user_service: UserService) -> None:
        self.match_service = match_service
        self.user_service = user_service

    async def execute(self, request: SwipeRequest) -> SwipeResponse:
        """Execute swipe flow.

        Raises:
            DuplicateProposalError: If an active match already exists
            QuotaExhaustedError: If a super-like exceeds the daily quota
            NotFoundError: If the target user does not exist
        """
        target_id = UserId(UUID(request.target_user_id))

        if request.action == SwipeAction.LIKE:
            match = await self.match_service.like_candidate(target_id)
        elif request.action == SwipeAction.SUPER_LIKE:
            match = await self.match_service.super_like_candidate(target_id)
        else:
            match = await self.match_service.skip_candidate(target_id)

        await self.user_service.touch_last_active()
        quota = await self.user_service.get_quota_status()
        viewer_id = self.match_service.user_id
        return SwipeResponse(
            match=MatchItem.from_match(match, viewer_id) if match else None,
            super_likes_remaining=quota.remaining,
        )
