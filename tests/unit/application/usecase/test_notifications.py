"""Unit tests for the notification use cases."""

from uuid import uuid4

import pytest

from pal.adapter.realtime import InMemoryChangeFeed
from pal.application.usecase.notification import (
    CloseNotificationFeedUseCase,
    GetNotificationsUseCase,
    MarkNotificationsReadRequest,
    MarkNotificationsReadUseCase,
    OpenNotificationFeedUseCase,
)
from pal.domain.repository import UserRepository
from tests.conftest import NOW, make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()


def _like(initiator, target):
    return {
        "table": "matches",
        "type": "INSERT",
        "record": {
            "id": str(uuid4()),
            "initiator_id": str(initiator.id),
            "target_id": str(target.id),
            "status": "pending",
            "is_super_like": False,
            "revision": 0,
            "retracted_at": None,
            "created_at": NOW.isoformat(),
            "updated_at": NOW.isoformat(),
        },
        "old_record": None,
    }


class TestNotificationFeed:
    @pytest.mark.asyncio
    async def test_feed_survives_across_requests(self, unit_env):
        """Open in one request, read and mark in later ones, then close."""
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(alice)
        await user_repo.save(bob)
        feed = await unit_env.get(InMemoryChangeFeed)

        async with session_scope(unit_env, alice.id) as scope:
            opened = await (await scope.get(OpenNotificationFeedUseCase)).execute()

        await feed.publish(_like(bob, alice))

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            before = await (await scope.get(GetNotificationsUseCase)).execute()
            after = await (await scope.get(MarkNotificationsReadUseCase)).execute(
                MarkNotificationsReadRequest(notification_id=before.notifications[0].id)
            )
            closed = await (await scope.get(CloseNotificationFeedUseCase)).execute()
            gone = await (await scope.get(GetNotificationsUseCase)).execute()

        # Assert
        assert opened.subscribed is True
        assert opened.unread_count == 0
        assert before.unread_count == 1
        assert before.notifications[0].content == "Bob liked you!"
        assert after.unread_count == 0
        assert after.notifications[0].is_read is True
        assert closed is True
        assert gone.subscribed is False
        assert gone.notifications == []

    @pytest.mark.asyncio
    async def test_reading_without_feed(self, unit_env):
        alice = make_user("Alice")
        async with session_scope(unit_env, alice.id) as scope:
            response = await (await scope.get(GetNotificationsUseCase)).execute()
            marked = await (await scope.get(MarkNotificationsReadUseCase)).execute(
                MarkNotificationsReadRequest()
            )
        assert response.subscribed is False
        assert marked.unread_count == 0
