"""Repository interfaces for Pal domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from pal.domain.repository.change_feed import (
    ChangeFeed,
    ChangeFilter,
    ChangeHandler,
    Subscription,
)
from pal.domain.repository.couple import CoupleLinkRepository
from pal.domain.repository.match import MatchRepository
from pal.domain.repository.meetup import MeetupInviteRepository
from pal.domain.repository.message import MessageRepository
from pal.domain.repository.profile_directory import ProfileDirectory
from pal.domain.repository.swipe_action import SwipeActionRepository
from pal.domain.repository.user import UserRepository

__all__ = [
    "ChangeFeed",
    "ChangeFilter",
    "ChangeHandler",
    "CoupleLinkRepository",
    "MatchRepository",
    "MeetupInviteRepository",
    "MessageRepository",
    "ProfileDirectory",
    "Subscription",
    "SwipeActionRepository",
    "UserRepository",
]
