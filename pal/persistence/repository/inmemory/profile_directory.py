"""In-memory profile directory for testing.

Reads straight from the in-memory user and match repositories.
"""

from typing import Optional

from pal.domain.repository import MatchRepository, ProfileDirectory, UserRepository
from pal.domain.value import MatchId, UserId


class InMemoryProfileDirectory(ProfileDirectory):
    def __init__(
        self, user_repository: UserRepository, match_repository: MatchRepository
    ) -> None:
        self.user_repository = user_repository
        self.match_repository = match_repository

    async def get_display_name(self, user_id: UserId) -> Optional[str]:
        user = await self.user_repository.find_by_id(user_id)
        return user.name if user else None

    async def get_match_participants(
        self, match_id: MatchId
    ) -> Optional[tuple[UserId, UserId]]:
        match = await self.match_repository.find_by_id(match_id)
        if not match:
            return None
        return match.initiator_id, match.target_id
