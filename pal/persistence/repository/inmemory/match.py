"""In-memory match repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from pal.domain.model.match import Match
from pal.domain.repository.match import MatchRepository
from pal.domain.value import MatchId, MatchStatus, UserId


class InMemoryMatchRepository(MatchRepository):
    """In-memory implementation of MatchRepository for testing."""

    def __init__(self) -> None:
        self._matches: dict[MatchId, Match] = {}

    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        return self._matches.get(match_id)

    async def find_active(
        self, initiator_id: UserId, target_id: UserId
    ) -> Optional[Match]:
        """Find the active match for one direction of a pair."""
        for match in self._matches.values():
            if (
                match.initiator_id == initiator_id
                and match.target_id == target_id
                and match.is_active
            ):
                return match
        return None

    async def find_for_user(
        self, user_id: UserId, status: Optional[MatchStatus] = None
    ) -> list[Match]:
        """Find non-retracted matches involving a user, newest first."""
        matches = [
            m
            for m in self._matches.values()
            if m.involves(user_id)
            and m.retracted_at is None
            and (status is None or m.status == status)
        ]
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches

    async def save(self, match: Match) -> Match:
        """Insert a match.

        Raises:
            IntegrityError: If an active match already exists for the pair
        """
        if match.is_active and await self.find_active(
            match.initiator_id, match.target_id
        ):
            raise IntegrityError("Duplicate active match", None, Exception())
        self._matches[match.id] = match
        return match

    async def compare_and_swap(self, match: Match, expected_revision: int) -> bool:
        """Replace the stored match if its revision is unchanged."""
        current = self._matches.get(match.id)
        if current is None or current.revision != expected_revision:
            return False
        self._matches[match.id] = match
        return True
