"""Match repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.match import Match
from pal.domain.value import MatchId, MatchStatus, UserId


class MatchRepository(ABC):
    """Repository for Match entity."""

    @abstractmethod
    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID.

        Args:
            match_id: The match's unique identifier

        Returns:
            The match if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(
        self, initiator_id: UserId, target_id: UserId
    ) -> Optional[Match]:
        """Find the active (pending/accepted, not retracted) match for a direction.

        Args:
            initiator_id: User who proposed
            target_id: User who was proposed to

        Returns:
            The active match if any, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_user(
        self, user_id: UserId, status: Optional[MatchStatus] = None
    ) -> list[Match]:
        """Find non-retracted matches involving a user, newest first.

        Args:
            user_id: Participant (initiator or target)
            status: Optional status filter

        Returns:
            List of matches
        """
        pass

    @abstractmethod
    async def save(self, match: Match) -> Match:
        """Insert a new match.

        Args:
            match: The match to insert

        Returns:
            The saved match

        Raises:
            IntegrityError: If an active match already exists for the pair
        """
        pass

    @abstractmethod
    async def compare_and_swap(self, match: Match, expected_revision: int) -> bool:
        """Write ``match`` only if the stored revision equals ``expected_revision``.

        Args:
            match: New state (its revision should be expected_revision + 1)
            expected_revision: Revision read before the change

        Returns:
            True if written, False if the stored row moved on
        """
        pass
