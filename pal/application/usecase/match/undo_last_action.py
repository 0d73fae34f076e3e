"""Undo last action use case."""

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.match.list_matches import MatchItem
from pal.domain.service import MatchService


class UndoLastActionUseCase(BaseUseCase):
    """Use case for undoing the last accept/decline (premium only)."""

    def __init__(self, match_service: MatchService) -> None:
        self.match_service = match_service

    async def execute(self, request: None = None) -> MatchItem:
        """Return the reopened pending match.

        Raises:
            PremiumRequiredError: If the user is not premium
            NothingToUndoError: If there is no recorded action
        """
        match = await self.match_service.undo_last_action()
        return MatchItem.from_match(match, self.match_service.user_id)
