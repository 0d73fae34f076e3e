"""Message domain service."""

from uuid import uuid4

import logfire

from pal.adapter.error import UpstreamUnavailableError
from pal.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from pal.domain.model import Conversation, Match, Message, SessionContext
from pal.domain.repository import MatchRepository, MessageRepository
from pal.domain.value import MatchId, MatchStatus, MessageId
from pal.util.clock import Clock

from .base import Service


class MessageService(Service):
    """Domain service for chat between matched users."""

    def __init__(
        self,
        session: SessionContext,
        message_repository: MessageRepository,
        match_repository: MatchRepository,
        clock: Clock,
    ) -> None:
        """Initialize message service.

        Args:
            session: Current user session
            message_repository: Message repository
            match_repository: Match repository
            clock: Time source
        """
        self.session = session
        self.message_repository = message_repository
        self.match_repository = match_repository
        self.clock = clock

    async def send_message(self, match_id: MatchId, content: str) -> Message:
        """Send a message in an accepted match.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user is not a participant
            ValidationError: If the match is not accepted or content is invalid
        """
        user_id = self.session.user_id
        with logfire.span(
            "message_service.send_message",
            user_id=str(user_id),
            match_id=str(match_id),
        ):
            match = await self._get_conversation_match(match_id, "message")
            if match.status != MatchStatus.ACCEPTED or match.retracted_at is not None:
                logfire.warn(
                    "Message to match that is not accepted",
                    match_id=str(match_id),
                    status=match.status.value,
                )
                raise ValidationError("Messages can only be sent in accepted matches")

            try:
                message = Message(
                    id=MessageId(uuid4()),
                    match_id=match_id,
                    sender_id=user_id,
                    content=content,
                    created_at=self.clock.now(),
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            saved = await self.message_repository.save(message)
            logfire.info(
                "Message sent",
                message_id=str(saved.id),
                match_id=str(match_id),
                sender_id=str(user_id),
            )
            return saved

    async def list_messages(self, match_id: MatchId) -> list[Message]:
        """Messages of a conversation, oldest first.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user is not a participant
        """
        await self._get_conversation_match(match_id, "read")
        try:
            return await self.message_repository.find_by_match(match_id)
        except UpstreamUnavailableError as e:
            logfire.warn(
                "Message listing degraded to empty result",
                match_id=str(match_id),
                error=str(e),
            )
            return []

    async def mark_message_read(self, message_id: MessageId) -> Message:
        """Mark a received message as read. Already-read messages are returned as is.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the session user is not the receiver
        """
        user_id = self.session.user_id
        message = await self.message_repository.find_by_id(message_id)
        if not message:
            raise NotFoundError("Message", str(message_id))

        match = await self._get_conversation_match(message.match_id, "read")
        if message.sender_id == user_id or not match.involves(user_id):
            raise NotAuthorizedError(
                "mark read", "message", str(message_id), str(user_id)
            )
        if message.is_read:
            return message

        return await self.message_repository.save(
            message.model_copy(update={"is_read": True})
        )

    async def list_conversations(self) -> list[Conversation]:
        """Accepted matches with their latest message, most recent activity first."""
        user_id = self.session.user_id
        with logfire.span("message_service.list_conversations", user_id=str(user_id)):
            try:
                matches = await self.match_repository.find_for_user(
                    user_id, MatchStatus.ACCEPTED
                )
                conversations = []
                for match in matches:
                    if not match.is_active:
                        continue
                    latest = await self.message_repository.find_latest(match.id)
                    unread = await self.message_repository.count_unread(
                        match.id, user_id
                    )
                    conversations.append(
                        Conversation(
                            match_id=match.id,
                            other_user_id=match.other_party(user_id),
                            last_message=latest,
                            unread_count=unread,
                            updated_at=latest.created_at if latest else match.updated_at,
                        )
                    )
            except UpstreamUnavailableError as e:
                logfire.warn(
                    "Conversation listing degraded to empty result",
                    user_id=str(user_id),
                    error=str(e),
                )
                return []

            conversations.sort(key=lambda c: c.updated_at, reverse=True)
            return conversations

    async def _get_conversation_match(self, match_id: MatchId, action: str) -> Match:
        match = await self.match_repository.find_by_id(match_id)
        if not match:
            raise NotFoundError("Match", str(match_id))
        if not match.involves(self.session.user_id):
            raise NotAuthorizedError(
                action, "match", str(match_id), str(self.session.user_id)
            )
        return match
