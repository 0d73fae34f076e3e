"""Message entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import MatchId, MessageId, UserId
from pal.util.clock import utc_now


class Message(DomainModel):
    """A chat message within an accepted match.

    The read flag only moves from unread to read.
    """

    id: MessageId
    match_id: MatchId
    sender_id: UserId
    content: str = Field(min_length=1, max_length=5000)
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class Conversation(DomainModel):
    """Read model: an accepted match seen as a chat thread."""

    match_id: MatchId
    other_user_id: UserId
    last_message: Optional[Message] = None
    unread_count: int = Field(default=0, ge=0)
    updated_at: datetime
