"""Change events.

The store publishes row changes as loosely-shaped payloads. The realtime
adapter translates every payload into exactly one of the variants below, so
no external row shape reaches the domain.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from pal.domain.model.common import DomainModel
from pal.domain.model.match import Match
from pal.domain.model.meetup import MeetupInvite
from pal.domain.model.message import Message
from pal.domain.value import StoreTable
from pal.util.clock import utc_now


class _ChangeEventBase(DomainModel):
    received_at: datetime = Field(default_factory=utc_now)


class MatchInserted(_ChangeEventBase):
    kind: Literal["match_inserted"] = "match_inserted"
    match: Match


class MatchUpdated(_ChangeEventBase):
    kind: Literal["match_updated"] = "match_updated"
    match: Match
    previous: Optional[Match] = None


class MessageInserted(_ChangeEventBase):
    kind: Literal["message_inserted"] = "message_inserted"
    message: Message


class MessageUpdated(_ChangeEventBase):
    kind: Literal["message_updated"] = "message_updated"
    message: Message


class MeetupInviteInserted(_ChangeEventBase):
    kind: Literal["meetup_invite_inserted"] = "meetup_invite_inserted"
    invite: MeetupInvite


class MeetupInviteUpdated(_ChangeEventBase):
    kind: Literal["meetup_invite_updated"] = "meetup_invite_updated"
    invite: MeetupInvite
    previous: Optional[MeetupInvite] = None


class RowDeleted(_ChangeEventBase):
    kind: Literal["row_deleted"] = "row_deleted"
    table: StoreTable
    row_id: str


ChangeEvent = Annotated[
    Union[
        MatchInserted,
        MatchUpdated,
        MessageInserted,
        MessageUpdated,
        MeetupInviteInserted,
        MeetupInviteUpdated,
        RowDeleted,
    ],
    Field(discriminator="kind"),
]

change_event_adapter: TypeAdapter[ChangeEvent] = TypeAdapter(ChangeEvent)
