"""Domain value objects for Pal."""

from pal.domain.value.identifiers import (
    CoupleLinkId,
    InterestId,
    MatchId,
    MeetupInviteId,
    MessageId,
    NotificationId,
    UserId,
)
from pal.domain.value.types import (
    CandidateFilter,
    CandidateSort,
    ChangeType,
    InterestName,
    MatchStatus,
    MeetupStatus,
    NotificationKind,
    Place,
    RelationshipStatus,
    SocialStyle,
    StoreTable,
    SwipeDecision,
)

__all__ = [
    # Identifiers
    "UserId",
    "InterestId",
    "MatchId",
    "MessageId",
    "MeetupInviteId",
    "CoupleLinkId",
    "NotificationId",
    # Types
    "CandidateFilter",
    "CandidateSort",
    "ChangeType",
    "InterestName",
    "MatchStatus",
    "MeetupStatus",
    "NotificationKind",
    "Place",
    "RelationshipStatus",
    "SocialStyle",
    "StoreTable",
    "SwipeDecision",
]
