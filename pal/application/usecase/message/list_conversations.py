"""List conversations use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.message.send_message import MessageItem
from pal.domain.service import MessageService


class ConversationItem(BaseModel):
    match_id: str
    other_user_id: str
    last_message: Optional[MessageItem]
    unread_count: int
    updated_at: datetime


class ListConversationsResponse(BaseModel):
    conversations: list[ConversationItem]


class ListConversationsUseCase(BaseUseCase):
    """Use case for the inbox: accepted matches with their latest message."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: None = None) -> ListConversationsResponse:
        conversations = await self.message_service.list_conversations()
        return ListConversationsResponse(
            conversations=[
                ConversationItem(
                    match_id=str(c.match_id),
                    other_user_id=str(c.other_user_id),
                    last_message=(
                        MessageItem.from_message(c.last_message)
                        if c.last_message
                        else None
                    ),
                    unread_count=c.unread_count,
                    updated_at=c.updated_at,
                )
                for c in conversations
            ]
        )
