"""Conversation and message routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from pal.application.usecase.message import (
    GetConversationRequest,
    GetConversationResponse,
    GetConversationUseCase,
    ListConversationsResponse,
    ListConversationsUseCase,
    MessageItem,
    SendMessageRequest,
    SendMessageUseCase,
)
from pal.domain.error import DomainError
from pal.interface.error import to_http_exception

router = APIRouter(
    prefix="/conversations", tags=["messages"], route_class=DishkaRoute
)


class SendMessageAPIRequest(BaseModel):
    """API request for sending a message."""

    content: str = Field(min_length=1, max_length=5000)


@router.get("", response_model=ListConversationsResponse)
async def list_conversations(
    list_conversations_use_case: FromDishka[ListConversationsUseCase],
) -> ListConversationsResponse:
    """List chats for accepted matches, most recently active first."""
    return await list_conversations_use_case.execute()


@router.get("/{match_id}/messages", response_model=GetConversationResponse)
async def get_conversation(
    match_id: UUID,
    get_conversation_use_case: FromDishka[GetConversationUseCase],
    mark_read: bool = True,
) -> GetConversationResponse:
    """Get the messages of one chat, oldest first."""
    try:
        return await get_conversation_use_case.execute(
            GetConversationRequest(match_id=str(match_id), mark_read=mark_read)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/{match_id}/messages",
    response_model=MessageItem,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    match_id: UUID,
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
) -> MessageItem:
    """Send a message in an accepted match."""
    try:
        return await send_message_use_case.execute(
            SendMessageRequest(match_id=str(match_id), content=request.content)
        )
    except DomainError as e:
        raise to_http_exception(e)
