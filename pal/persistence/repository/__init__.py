"""PostgreSQL repository implementations."""

from pal.persistence.repository.couple import PostgresCoupleLinkRepository
from pal.persistence.repository.match import PostgresMatchRepository
from pal.persistence.repository.meetup import PostgresMeetupInviteRepository
from pal.persistence.repository.message import PostgresMessageRepository
from pal.persistence.repository.profile_directory import PostgresProfileDirectory
from pal.persistence.repository.swipe_action import PostgresSwipeActionRepository
from pal.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCoupleLinkRepository",
    "PostgresMatchRepository",
    "PostgresMessageRepository",
    "PostgresMeetupInviteRepository",
    "PostgresSwipeActionRepository",
    "PostgresProfileDirectory",
]
