"""Couple link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.couple import CoupleLink
from pal.domain.value import CoupleLinkId, UserId


class CoupleLinkRepository(ABC):
    """Repository for CoupleLink entity."""

    @abstractmethod
    async def find_by_id(self, link_id: CoupleLinkId) -> Optional[CoupleLink]:
        pass

    @abstractmethod
    async def find_between(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[CoupleLink]:
        """The pair's link, whichever side requested it."""
        pass

    @abstractmethod
    async def find_for_user(
        self, user_id: UserId, confirmed: Optional[bool] = None
    ) -> list[CoupleLink]:
        """Links involving a user, newest first."""
        pass

    @abstractmethod
    async def save(self, link: CoupleLink) -> CoupleLink:
        """Insert a new link.

        Raises:
            IntegrityError: If the pair already has a link
        """
        pass

    @abstractmethod
    async def compare_and_swap(self, link: CoupleLink, expected_revision: int) -> bool:
        """Write ``link`` only if the stored revision equals ``expected_revision``."""
        pass

    @abstractmethod
    async def delete(self, link_id: CoupleLinkId) -> bool:
        """Remove a link. Returns False if it was already gone."""
        pass
