"""Respond to match use case."""

from uuid import UUID

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.match.list_matches import MatchItem
from pal.domain.service import MatchService
from pal.domain.value import MatchId, SwipeDecision


class RespondToMatchRequest(BaseModel):
    match_id: str
    decision: SwipeDecision


class RespondToMatchUseCase(BaseUseCase):
    """Use case for accepting or declining a pending match."""

    def __init__(self, match_service: MatchService) -> None:
        self.match_service = match_service

    async def execute(self, request: RespondToMatchRequest) -> MatchItem:
        """Accept or decline the match.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user may not respond to it
            InvalidTransitionError: If the match is not pending
        """
        match_id = MatchId(UUID(request.match_id))
        if request.decision == SwipeDecision.ACCEPTED:
            match = await self.match_service.accept_match(match_id)
        else:
            match = await self.match_service.decline_match(match_id)
        return MatchItem.from_match(match, self.match_service.user_id)
