"""In-memory swipe action repository for testing."""

from typing import Optional

from pal.domain.model.swipe import SwipeAction
from pal.domain.repository.swipe_action import SwipeActionRepository
from pal.domain.value import UserId


class InMemorySwipeActionRepository(SwipeActionRepository):
    def __init__(self) -> None:
        self._actions: dict[UserId, SwipeAction] = {}

    async def find_last(self, user_id: UserId) -> Optional[SwipeAction]:
        return self._actions.get(user_id)

    async def record(self, action: SwipeAction) -> SwipeAction:
        self._actions[action.user_id] = action
        return action

    async def clear(self, user_id: UserId) -> None:
        self._actions.pop(user_id, None)
