"""Unit tests for MessageService."""

import pytest

from pal.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from pal.domain.repository import MatchRepository, UserRepository
from pal.domain.service import MessageService
from pal.domain.value import MatchStatus
from pal.util.clock import FixedClock
from tests.conftest import make_match, make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()


async def _friends(unit_env, status=MatchStatus.ACCEPTED):
    alice, bob = make_user("Alice"), make_user("Bob")
    user_repo = await unit_env.get(UserRepository)
    await user_repo.save(alice)
    await user_repo.save(bob)
    match = await (await unit_env.get(MatchRepository)).save(
        make_match(alice.id, bob.id, status)
    )
    return alice, bob, match


class TestSendMessage:
    """Tests for send_message."""

    @pytest.mark.asyncio
    async def test_send_in_accepted_match(self, unit_env):
        """Participants of an accepted match can chat."""
        # Arrange
        alice, bob, match = await _friends(unit_env)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            message = await (await scope.get(MessageService)).send_message(
                match.id, "Coffee on Saturday?"
            )

        # Assert
        assert message.sender_id == alice.id
        assert message.is_read is False
        async with session_scope(unit_env, bob.id) as scope:
            thread = await (await scope.get(MessageService)).list_messages(match.id)
        assert [m.id for m in thread] == [message.id]

    @pytest.mark.asyncio
    async def test_send_in_pending_match_fails(self, unit_env):
        """Chat opens only after acceptance."""
        # Arrange
        alice, _, match = await _friends(unit_env, MatchStatus.PENDING)

        # Act & Assert
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(MessageService)).send_message(match.id, "Hi")

    @pytest.mark.asyncio
    async def test_outsider_cannot_read_or_send(self, unit_env):
        """Only the two participants see the conversation."""
        # Arrange
        _, _, match = await _friends(unit_env)
        eve = make_user("Eve")
        await (await unit_env.get(UserRepository)).save(eve)

        # Act & Assert
        async with session_scope(unit_env, eve.id) as scope:
            message_service = await scope.get(MessageService)
            with pytest.raises(NotAuthorizedError):
                await message_service.send_message(match.id, "Hi")
            with pytest.raises(NotAuthorizedError):
                await message_service.list_messages(match.id)

    @pytest.mark.asyncio
    async def test_oversized_content_is_rejected(self, unit_env):
        alice, _, match = await _friends(unit_env)
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(MessageService)).send_message(
                    match.id, "x" * 5001
                )


class TestReadState:
    """Tests for mark_message_read and list_conversations."""

    @pytest.mark.asyncio
    async def test_receiver_marks_read_idempotently(self, unit_env):
        """Marking read twice leaves the message read."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        async with session_scope(unit_env, alice.id) as scope:
            message = await (await scope.get(MessageService)).send_message(
                match.id, "Hello"
            )

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            message_service = await scope.get(MessageService)
            first = await message_service.mark_message_read(message.id)
            second = await message_service.mark_message_read(message.id)

        # Assert
        assert first.is_read is True
        assert second.is_read is True

    @pytest.mark.asyncio
    async def test_sender_cannot_mark_own_message_read(self, unit_env):
        alice, _, match = await _friends(unit_env)
        async with session_scope(unit_env, alice.id) as scope:
            message_service = await scope.get(MessageService)
            message = await message_service.send_message(match.id, "Hello")
            with pytest.raises(NotAuthorizedError):
                await message_service.mark_message_read(message.id)

    @pytest.mark.asyncio
    async def test_conversations_show_latest_message_and_unread(self, unit_env):
        """Conversation list carries the last message and the reader's unread count."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        clock = await unit_env.get(FixedClock)
        async with session_scope(unit_env, alice.id) as scope:
            message_service = await scope.get(MessageService)
            await message_service.send_message(match.id, "First")
            clock.advance(minutes=1)
            last = await message_service.send_message(match.id, "Second")

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            conversations = await (
                await scope.get(MessageService)
            ).list_conversations()

        # Assert
        assert len(conversations) == 1
        conversation = conversations[0]
        assert conversation.match_id == match.id
        assert conversation.other_user_id == alice.id
        assert conversation.last_message.id == last.id
        assert conversation.unread_count == 2
        assert conversation.updated_at == last.created_at

    @pytest.mark.asyncio
    async def test_unknown_match(self, unit_env):
        alice, _, _ = await _friends(unit_env)
        other = make_match(make_user().id, make_user().id)
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(NotFoundError):
                await (await scope.get(MessageService)).list_messages(other.id)
