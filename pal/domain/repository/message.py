"""Message repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pal.domain.model.message import Message
from pal.domain.value import MatchId, MessageId, UserId


class MessageRepository(ABC):
    """Repository for Message entity."""

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        pass

    @abstractmethod
    async def find_by_match(self, match_id: MatchId) -> list[Message]:
        """Find all messages of a match, oldest first.

        Args:
            match_id: Conversation (match) ID

        Returns:
            List of messages
        """
        pass

    @abstractmethod
    async def find_latest(self, match_id: MatchId) -> Optional[Message]:
        """Find the most recent message of a match."""
        pass

    @abstractmethod
    async def count_unread(self, match_id: MatchId, reader_id: UserId) -> int:
        """Count unread messages in a match not sent by ``reader_id``."""
        pass

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Save a message (create or update)."""
        pass
