"""In-memory message repository for testing."""

from typing import Optional

from pal.domain.model.message import Message
from pal.domain.repository.message import MessageRepository
from pal.domain.value import MatchId, MessageId, UserId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: dict[MessageId, Message] = {}

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        return self._messages.get(message_id)

    async def find_by_match(self, match_id: MatchId) -> list[Message]:
        """Messages of a match, oldest first."""
        messages = [m for m in self._messages.values() if m.match_id == match_id]
        messages.sort(key=lambda m: m.created_at)
        return messages

    async def find_latest(self, match_id: MatchId) -> Optional[Message]:
        messages = await self.find_by_match(match_id)
        return messages[-1] if messages else None

    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        return sum(
            1
            for m in self._messages.values()
            if m.match_id == match_id and m.sender_id != reader_id and not m.is_read
        )

    async def save(self, message: Message) -> Message:
        self._messages[message.id] = message
        return message
