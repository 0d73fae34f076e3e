"""Send message use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pal.application.usecase.base import BaseUseCase
from pal.domain.model import Message
from pal.domain.service import MessageService
from pal.domain.value import MatchId


class MessageItem(BaseModel):
    message_id: str
    match_id: str
    sender_id: str
    content: str
    is_read: bool
    created_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageItem":
        return cls(
            message_id=str(message.id),
            match_id=str(message.match_id),
            sender_id=str(message.sender_id),
            content=message.content,
            is_read=message.is_read,
            created_at=message.created_at,
        )


class SendMessageRequest(BaseModel):
    match_id: str
    content: str = Field(min_length=1, max_length=5000)


class SendMessageUseCase(BaseUseCase):
    """Use case for sending a chat message in an accepted match."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: SendMessageRequest) -> MessageItem:
        message = await self.message_service.send_message(
            MatchId(UUID(request.match_id)), request.content
        )
        return MessageItem.from_message(message)
