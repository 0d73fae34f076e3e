"""Swipe action repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.swipe import SwipeAction
from pal.domain.value import UserId


class SwipeActionRepository(ABC):
    """Keeps at most one (the latest) swipe action per user."""

    @abstractmethod
    async def find_last(self, user_id: UserId) -> Optional[SwipeAction]:
        """Find the user's last recorded action."""
        pass

    @abstractmethod
    async def record(self, action: SwipeAction) -> SwipeAction:
        """Store ``action`` as the user's last action, replacing any previous one."""
        pass

    @abstractmethod
    async def clear(self, user_id: UserId) -> None:
        """Forget the user's last action."""
        pass
