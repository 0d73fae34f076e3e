"""Domain model entities for Pal."""

from pal.domain.model.candidate import Candidate
from pal.domain.model.couple import CoupleLink
from pal.domain.model.event import (
    ChangeEvent,
    MatchInserted,
    MatchUpdated,
    MeetupInviteInserted,
    MeetupInviteUpdated,
    MessageInserted,
    MessageUpdated,
    RowDeleted,
)
from pal.domain.model.match import Match
from pal.domain.model.meetup import MeetupInvite
from pal.domain.model.message import Conversation, Message
from pal.domain.model.notification import Notification
from pal.domain.model.session import SessionContext
from pal.domain.model.swipe import SwipeAction
from pal.domain.model.user import Interest, User

__all__ = [
    "Candidate",
    "ChangeEvent",
    "Conversation",
    "CoupleLink",
    "Interest",
    "Match",
    "MatchInserted",
    "MatchUpdated",
    "MeetupInvite",
    "MeetupInviteInserted",
    "MeetupInviteUpdated",
    "Message",
    "MessageInserted",
    "MessageUpdated",
    "Notification",
    "RowDeleted",
    "SessionContext",
    "SwipeAction",
    "User",
]
