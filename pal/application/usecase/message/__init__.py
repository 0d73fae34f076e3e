"""Message use cases."""

from .get_conversation import (
    GetConversationRequest,
    GetConversationResponse,
    GetConversationUseCase,
)
from .list_conversations import (
    ConversationItem,
    ListConversationsResponse,
    ListConversationsUseCase,
)
from .send_message import MessageItem, SendMessageRequest, SendMessageUseCase

__all__ = [
    "ConversationItem",
    "GetConversationRequest",
    "GetConversationResponse",
    "GetConversationUseCase",
    "ListConversationsResponse",
    "ListConversationsUseCase",
    "MessageItem",
    "SendMessageRequest",
    "SendMessageUseCase",
]
