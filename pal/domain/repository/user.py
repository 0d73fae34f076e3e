"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.user import User
from pal.domain.value import CandidateFilter, UserId


class UserRepository(ABC):
    """Profiles, quota counters and activity timestamps of Pal users."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def find_many(self, user_ids: list[UserId]) -> list[User]:
        """Batch lookup. Unknown ids are skipped; order is unspecified."""
        pass

    @abstractmethod
    async def find_browsable(
        self,
        viewer_id: UserId,
        exclude: set[UserId],
        filters: Optional[CandidateFilter] = None,
    ) -> list[User]:
        """Every user but the viewer and ``exclude`` who passes ``filters``.

        Ordered by most recently active, then id. Not paged: callers sort by
        their own key and page afterwards.
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email address."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Create or overwrite the user."""
        pass
