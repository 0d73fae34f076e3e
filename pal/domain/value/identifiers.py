"""Strongly typed identifiers for Pal domain entities.

The store hands identifiers out as opaque strings; rows are keyed by UUIDs,
so identifiers are NewTypes over UUID. Notification ids are derived strings.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InterestId = NewType("InterestId", UUID)
MatchId = NewType("MatchId", UUID)
MessageId = NewType("MessageId", UUID)
MeetupInviteId = NewType("MeetupInviteId", UUID)
CoupleLinkId = NewType("CoupleLinkId", UUID)
NotificationId = NewType("NotificationId", str)
