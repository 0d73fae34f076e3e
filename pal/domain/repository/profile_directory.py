"""Profile directory interface.

Read-only lookups used by long-lived components (the notification relay)
that outlive a single request and its database session.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.value import MatchId, UserId


class ProfileDirectory(ABC):
    """Lightweight lookups of display data."""

    @abstractmethod
    async def get_display_name(self, user_id: UserId) -> Optional[str]:
        """Return the user's display name, or None if unknown."""
        pass

    @abstractmethod
    async def get_match_participants(
        self, match_id: MatchId
    ) -> Optional[tuple[UserId, UserId]]:
        """Return (initiator_id, target_id) of a match, or None if unknown."""
        pass
