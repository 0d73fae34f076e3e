"""In-memory repository implementations for testing."""

from .couple import InMemoryCoupleLinkRepository
from .match import InMemoryMatchRepository
from .meetup import InMemoryMeetupInviteRepository
from .message import InMemoryMessageRepository
from .profile_directory import InMemoryProfileDirectory
from .swipe_action import InMemorySwipeActionRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCoupleLinkRepository",
    "InMemoryMatchRepository",
    "InMemoryMeetupInviteRepository",
    "InMemoryMessageRepository",
    "InMemoryProfileDirectory",
    "InMemorySwipeActionRepository",
    "InMemoryUserRepository",
]
