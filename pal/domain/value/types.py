"""Domain value objects for Pal.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from pal.domain.value.common import RootValueObject, ValueObject


class SocialStyle(str, Enum):
    """How a user describes their social energy."""

    INTROVERT = "introvert"
    AMBIVERT = "ambivert"
    EXTROVERT = "extrovert"


class MatchStatus(str, Enum):
    """Status of a match proposal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchStatus.PENDING


class MeetupStatus(str, Enum):
    """Status of a meetup invite."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    PROPOSED_CHANGE = "proposed_change"

    @property
    def is_terminal(self) -> bool:
        return self in (
            MeetupStatus.ACCEPTED,
            MeetupStatus.DECLINED,
            MeetupStatus.CANCELLED,
        )


class RelationshipStatus(str, Enum):
    """How a linked couple describes itself."""

    COUPLE = "couple"
    MARRIED = "married"


class NotificationKind(str, Enum):
    """Kind of in-session notification."""

    MATCH = "match"
    SUPER_LIKE = "superLike"
    MESSAGE = "message"


class SwipeDecision(str, Enum):
    """A user's response to an incoming match proposal."""

    ACCEPTED = "accepted"
    DECLINED = "declined"


class CandidateSort(str, Enum):
    """Ordering for candidate listings."""

    COMPATIBILITY = "compatibility"
    RECENT = "recent"


class ChangeType(str, Enum):
    """Row change kinds emitted by the store."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class StoreTable(str, Enum):
    """Tables that publish change events."""

    USERS = "users"
    MATCHES = "matches"
    MESSAGES = "messages"
    MEETUP_INVITES = "meetup_invites"


class InterestName(RootValueObject[str]):
    """Free-text interest label, e.g. 'hiking' or 'board games'."""

    @field_validator("root")
    @classmethod
    def validate_interest_name(cls, v: str) -> str:
        """Strip whitespace and check length."""
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Interest name must be 1-50 characters")
        return v

    @property
    def key(self) -> str:
        """Case-insensitive comparison key."""
        return self.root.casefold()


class Place(ValueObject):
    """Where a meetup happens."""

    name: str
    address: str
    category: str  # e.g. 'cafe', 'park', 'museum'


class CandidateFilter(ValueObject):
    """Any-of filters for candidate listings. Empty lists mean no filtering."""

    gender: list[str] = []
    social_style: list[SocialStyle] = []
    interests: list[str] = []
