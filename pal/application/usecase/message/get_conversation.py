"""Get conversation use case."""

from uuid import UUID

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.message.send_message import MessageItem
from pal.domain.service import MessageService
from pal.domain.value import MatchId


class GetConversationRequest(BaseModel):
    match_id: str
    mark_read: bool = True  # Mark received messages read while fetching


class GetConversationResponse(BaseModel):
    match_id: str
    messages: list[MessageItem]


class GetConversationUseCase(BaseUseCase):
    """Use case for reading one chat thread, oldest message first."""

    def __init__(self, message_service: MessageService) -> None:
        self.message_service = message_service

    async def execute(self, request: GetConversationRequest) -> GetConversationResponse:
        match_id = MatchId(UUID(request.match_id))
        messages = await self.message_service.list_messages(match_id)

        if request.mark_read:
            me = self.message_service.session.user_id
            updated = []
            for message in messages:
                if message.sender_id != me and not message.is_read:
                    message = await self.message_service.mark_message_read(message.id)
                updated.append(message)
            messages = updated

        return GetConversationResponse(
            match_id=request.match_id,
            messages=[MessageItem.from_message(m) for m in messages],
        )
