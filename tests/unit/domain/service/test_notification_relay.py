"""Unit tests for NotificationRelay and NotificationHub."""

from typing import Any, Optional
from uuid import uuid4

import pytest

from pal.adapter.realtime import InMemoryChangeFeed
from pal.domain.model import SessionContext
from pal.domain.repository import MatchRepository, ProfileDirectory, UserRepository
from pal.domain.service import NotificationHub, NotificationRelay
from pal.domain.value import MatchStatus, NotificationId, NotificationKind, UserId
from pal.util.clock import FixedClock
from tests.conftest import NOW, make_match, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def match_payload(
    initiator_id: UserId,
    target_id: UserId,
    is_super_like: bool = False,
    match_id: Optional[str] = None,
    reopened_from: Optional[str] = None,
) -> dict[str, Any]:
    """Raw INSERT payload shaped like the database trigger's."""
    return {
        "table": "matches",
        "type": "INSERT",
        "record": {
            "id": match_id or str(uuid4()),
            "initiator_id": str(initiator_id),
            "target_id": str(target_id),
            "status": "pending",
            "is_super_like": is_super_like,
            "revision": 0,
            "retracted_at": None,
            "reopened_from": reopened_from,
            "created_at": NOW.isoformat(),
            "updated_at": NOW.isoformat(),
        },
        "old_record": None,
    }


def message_payload(match_id, sender_id: UserId, message_id=None) -> dict[str, Any]:
    return {
        "table": "messages",
        "type": "INSERT",
        "record": {
            "id": message_id or str(uuid4()),
            "match_id": str(match_id),
            "sender_id": str(sender_id),
            "content": "Hey there",
            "is_read": False,
            "created_at": NOW.isoformat(),
        },
        "old_record": None,
    }


async def _relay(unit_env, user_id: UserId) -> NotificationRelay:
    relay = NotificationRelay(
        session=SessionContext(user_id=user_id),
        change_feed=await unit_env.get(InMemoryChangeFeed),
        profile_directory=await unit_env.get(ProfileDirectory),
        clock=await unit_env.get(FixedClock),
    )
    await relay.start()
    return relay


async def _seed(unit_env, *users):
    user_repo = await unit_env.get(UserRepository)
    for user in users:
        await user_repo.save(user)


class TestMatchNotifications:
    """Likes and super-likes towards the session user."""

    @pytest.mark.asyncio
    async def test_super_like_notification(self, unit_env):
        """Bob super-likes Alice: one unread superLike notification."""
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)
        match_id = str(uuid4())

        # Act
        await feed.publish(match_payload(bob.id, alice.id, True, match_id))

        # Assert
        assert relay.unread_count == 1
        [notification] = relay.notifications
        assert notification.id == f"match-{match_id}"
        assert notification.kind == NotificationKind.SUPER_LIKE
        assert notification.content == "Bob Super Liked you!"
        assert notification.related_user_id == bob.id
        assert notification.action_url == "/matches"
        assert notification.is_read is False

    @pytest.mark.asyncio
    async def test_plain_like_notification(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(match_payload(bob.id, alice.id))

        assert relay.notifications[0].kind == NotificationKind.MATCH
        assert relay.notifications[0].content == "Bob liked you!"

    @pytest.mark.asyncio
    async def test_like_towards_someone_else_is_ignored(self, unit_env):
        """Only matches targeting the session user are relayed."""
        alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
        await _seed(unit_env, alice, bob, carol)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(match_payload(bob.id, carol.id))

        assert relay.notifications == []
        assert relay.unread_count == 0

    @pytest.mark.asyncio
    async def test_unknown_initiator_is_dropped(self, unit_env):
        """No display name means no notification."""
        alice, ghost = make_user("Alice"), make_user("Ghost")
        await _seed(unit_env, alice)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(match_payload(ghost.id, alice.id))

        assert relay.notifications == []

    @pytest.mark.asyncio
    async def test_redelivered_event_is_not_duplicated(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)
        payload = match_payload(bob.id, alice.id)

        await feed.publish(payload)
        await feed.publish(payload)

        assert len(relay.notifications) == 1
        assert relay.unread_count == 1

    @pytest.mark.asyncio
    async def test_reopened_proposal_is_not_announced_again(self, unit_env):
        """An undo puts the proposal back silently."""
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(match_payload(bob.id, alice.id, reopened_from=str(uuid4())))

        assert relay.notifications == []
        assert relay.unread_count == 0

    @pytest.mark.asyncio
    async def test_oldest_notifications_are_dropped_past_the_cap(self, unit_env):
        # Arrange
        alice = make_user("Alice")
        others = [make_user(f"Friend {i}") for i in range(3)]
        await _seed(unit_env, alice, *others)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = NotificationRelay(
            session=SessionContext(user_id=alice.id),
            change_feed=feed,
            profile_directory=await unit_env.get(ProfileDirectory),
            clock=await unit_env.get(FixedClock),
            max_notifications=2,
        )
        await relay.start()

        # Act
        for other in others:
            await feed.publish(match_payload(other.id, alice.id))

        # Assert
        assert [n.related_user_id for n in relay.notifications] == [
            others[2].id,
            others[1].id,
        ]
        assert relay.unread_count == 2


class TestMessageNotifications:
    """Messages from the other participant."""

    @pytest.mark.asyncio
    async def test_message_notification(self, unit_env):
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        match = await (await unit_env.get(MatchRepository)).save(
            make_match(alice.id, bob.id, MatchStatus.ACCEPTED)
        )
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)
        message_id = str(uuid4())

        # Act
        await feed.publish(message_payload(match.id, bob.id, message_id))

        # Assert
        [notification] = relay.notifications
        assert notification.id == f"message-{message_id}"
        assert notification.kind == NotificationKind.MESSAGE
        assert notification.content == "New message from Bob"
        assert notification.action_url == f"/messages/{match.id}"

    @pytest.mark.asyncio
    async def test_own_messages_are_ignored(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        match = await (await unit_env.get(MatchRepository)).save(
            make_match(alice.id, bob.id, MatchStatus.ACCEPTED)
        )
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(message_payload(match.id, alice.id))

        assert relay.notifications == []

    @pytest.mark.asyncio
    async def test_messages_in_other_matches_are_ignored(self, unit_env):
        """Alice is not a participant of Bob and Carol's chat."""
        alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
        await _seed(unit_env, alice, bob, carol)
        match = await (await unit_env.get(MatchRepository)).save(
            make_match(bob.id, carol.id, MatchStatus.ACCEPTED)
        )
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await feed.publish(message_payload(match.id, bob.id))

        assert relay.notifications == []


class TestReadState:
    """mark_read and mark_all_read."""

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, unit_env):
        """Marking the same notification twice decrements unread once."""
        # Arrange
        alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
        await _seed(unit_env, alice, bob, carol)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)
        await feed.publish(match_payload(bob.id, alice.id))
        await feed.publish(match_payload(carol.id, alice.id))
        newest = relay.notifications[0]

        # Act
        relay.mark_read(newest.id)
        relay.mark_read(newest.id)
        relay.mark_read(NotificationId("match-unknown"))

        # Assert
        assert relay.unread_count == 1
        assert relay.notifications[0].is_read is True
        assert relay.notifications[0].content == "Carol liked you!"

    @pytest.mark.asyncio
    async def test_mark_all_read(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)
        await feed.publish(match_payload(bob.id, alice.id))

        relay.mark_all_read()
        relay.mark_all_read()

        assert relay.unread_count == 0
        assert all(n.is_read for n in relay.notifications)


class TestLifecycle:
    """start/close and the per-user hub."""

    @pytest.mark.asyncio
    async def test_closed_relay_receives_nothing(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await relay.close()
        delivered = await feed.publish(match_payload(bob.id, alice.id))

        assert delivered == 0
        assert relay.active is False
        assert feed.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_start_twice_subscribes_once(self, unit_env):
        alice = make_user("Alice")
        await _seed(unit_env, alice)
        feed = await unit_env.get(InMemoryChangeFeed)
        relay = await _relay(unit_env, alice.id)

        await relay.start()

        assert feed.subscriber_count == 2

    @pytest.mark.asyncio
    async def test_hub_keeps_one_relay_per_user(self, unit_env):
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        hub = await unit_env.get(NotificationHub)
        feed = await unit_env.get(InMemoryChangeFeed)

        # Act
        first = await hub.open(SessionContext(user_id=alice.id))
        second = await hub.open(SessionContext(user_id=alice.id))
        await feed.publish(match_payload(bob.id, alice.id))

        # Assert
        assert first is second
        assert (await hub.get(alice.id)).unread_count == 1
        assert await hub.get(bob.id) is None

        assert await hub.close(alice.id) is True
        assert await hub.close(alice.id) is False
        assert feed.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_hub_evicts_idle_relays(self, unit_env):
        """A relay nobody reads for the idle timeout is closed and forgotten."""
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        hub = await unit_env.get(NotificationHub)
        feed = await unit_env.get(InMemoryChangeFeed)
        clock = await unit_env.get(FixedClock)
        await hub.open(SessionContext(user_id=alice.id))

        # Act - Bob keeps using his feed after Alice went quiet
        clock.advance(seconds=hub.idle_timeout.total_seconds() - 1)
        await hub.open(SessionContext(user_id=bob.id))
        clock.advance(seconds=2)
        evicted = await hub.evict_idle()

        # Assert
        assert evicted == 1
        assert await hub.get(alice.id) is None
        assert await hub.get(bob.id) is not None
        assert hub.relay_count == 1
        assert feed.subscriber_count == 2

    @pytest.mark.asyncio
    async def test_reading_keeps_relay_alive(self, unit_env):
        # Arrange
        alice = make_user("Alice")
        await _seed(unit_env, alice)
        hub = await unit_env.get(NotificationHub)
        clock = await unit_env.get(FixedClock)
        relay = await hub.open(SessionContext(user_id=alice.id))

        # Act
        clock.advance(seconds=hub.idle_timeout.total_seconds() - 1)
        await hub.get(alice.id)
        clock.advance(seconds=2)

        # Assert
        assert await hub.get(alice.id) is relay
        assert relay.active is True
