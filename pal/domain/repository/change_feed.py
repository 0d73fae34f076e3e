"""Change feed interface.

A change feed delivers store row changes matching a filter until the
subscription is released. Delivery is at-least-once while subscribed;
changes that happen while unsubscribed are lost.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from pal.domain.model.event import ChangeEvent
from pal.domain.value import ChangeType, StoreTable
from pal.domain.value.common import ValueObject

ChangeHandler = Callable[[ChangeEvent], Awaitable[None]]


class ChangeFilter(ValueObject):
    """Which row changes a subscriber wants.

    Mirrors the store's filter syntax: ``column=eq.value`` / ``column=neq.value``.
    """

    table: StoreTable
    change_type: Optional[ChangeType] = None  # None = all change types
    equals: dict[str, str] = {}
    not_equals: dict[str, str] = {}

    def matches(self, table: str, change_type: str, record: dict[str, Any]) -> bool:
        """Check a raw row change against the filter."""
        if table != self.table.value:
            return False
        if self.change_type is not None and change_type != self.change_type.value:
            return False
        for column, value in self.equals.items():
            if str(record.get(column)) != value:
                return False
        for column, value in self.not_equals.items():
            if str(record.get(column)) == value:
                return False
        return True


class Subscription(ABC):
    """Handle for an active subscription."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """Whether events are still being delivered."""
        pass

    @abstractmethod
    async def unsubscribe(self) -> None:
        """Stop delivery. Calling twice is harmless."""
        pass


class ChangeFeed(ABC):
    """Source of row change events."""

    @abstractmethod
    async def subscribe(
        self, change_filter: ChangeFilter, handler: ChangeHandler
    ) -> Subscription:
        """Register ``handler`` for changes matching ``change_filter``.

        Raises:
            UpstreamUnavailableError: If the channel cannot be reached
        """
        pass
