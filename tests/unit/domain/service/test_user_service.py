"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from pal.domain.error import NotFoundError, QuotaExhaustedError, ValidationError
from pal.domain.repository import UserRepository
from pal.domain.service import UserService
from pal.domain.value import SocialStyle, UserId
from pal.util.clock import FixedClock
from tests.conftest import NOW, make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()


class TestCreateProfile:
    """Tests for create_profile."""

    @pytest.mark.asyncio
    async def test_new_profile_starts_on_free_tier(self, unit_env):
        """New users get the free daily super-like and today's reset date."""
        # Arrange
        user_id = UserId(uuid4())

        # Act
        async with session_scope(unit_env, user_id) as scope:
            user = await (await scope.get(UserService)).create_profile(
                name="Alice",
                social_style=SocialStyle.INTROVERT,
                interests=["Hiking", "board games"],
            )

        # Assert
        assert user.id == user_id
        assert user.is_premium is False
        assert user.super_likes_remaining == 1
        assert user.last_reset_date == NOW.date()
        assert [i.name.root for i in user.interests] == ["Hiking", "board games"]

    @pytest.mark.asyncio
    async def test_second_profile_is_rejected(self, unit_env):
        """A user only has one profile."""
        # Arrange
        alice = make_user("Alice")
        await (await unit_env.get(UserRepository)).save(alice)

        # Act & Assert
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(UserService)).create_profile(name="Alice")

    @pytest.mark.asyncio
    async def test_duplicate_interests_are_rejected(self, unit_env):
        """Interest names are unique regardless of case."""
        async with session_scope(unit_env, UserId(uuid4())) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(UserService)).create_profile(
                    name="Alice", interests=["Chess", "chess"]
                )


class TestUpdateProfile:
    """Tests for update_profile and interests."""

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, unit_env):
        """Untouched fields keep their values."""
        # Arrange
        alice = make_user("Alice", headline="Coffee first")
        await (await unit_env.get(UserRepository)).save(alice)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            updated = await (await scope.get(UserService)).update_profile(
                about_me="Long walks and longer books"
            )

        # Assert
        assert updated.about_me == "Long walks and longer books"
        assert updated.headline == "Coffee first"
        assert updated.display_about == "Long walks and longer books"

    @pytest.mark.asyncio
    async def test_quota_fields_are_not_editable(self, unit_env):
        """Quota counters cannot be set through profile edits."""
        # Arrange
        alice = make_user("Alice")
        await (await unit_env.get(UserRepository)).save(alice)

        # Act & Assert
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(UserService)).update_profile(
                    super_likes_remaining=50
                )

    @pytest.mark.asyncio
    async def test_add_and_remove_interest(self, unit_env):
        """Interests are added once and removed case-insensitively."""
        # Arrange
        alice = make_user("Alice", interests=["Hiking"])
        await (await unit_env.get(UserRepository)).save(alice)

        async with session_scope(unit_env, alice.id) as scope:
            user_service = await scope.get(UserService)

            # Act
            added = await user_service.add_interest("Pottery")
            with pytest.raises(ValidationError):
                await user_service.add_interest("pottery")
            removed = await user_service.remove_interest("HIKING")

        # Assert
        assert added.interest_keys == {"hiking", "pottery"}
        assert removed.interest_keys == {"pottery"}

    @pytest.mark.asyncio
    async def test_current_user_without_profile(self, unit_env):
        """Signed-in users without a profile get NotFoundError."""
        async with session_scope(unit_env, UserId(uuid4())) as scope:
            with pytest.raises(NotFoundError):
                await (await scope.get(UserService)).get_current_user()


class TestQuota:
    """Tests for the daily super-like quota."""

    @pytest.mark.asyncio
    async def test_quota_status_applies_reset_without_saving(self, unit_env):
        """Yesterday's spent quota reads as available today."""
        # Arrange
        alice = make_user("Alice", super_likes_remaining=0)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(alice)
        (await unit_env.get(FixedClock)).advance(days=1)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            status = await (await scope.get(UserService)).get_quota_status()

        # Assert
        assert status.remaining == 1
        stored = await user_repo.find_by_id(alice.id)
        assert stored.super_likes_remaining == 0

    @pytest.mark.asyncio
    async def test_reserve_with_no_quota_fails(self, unit_env):
        """A spent free quota cannot be charged again the same day."""
        # Arrange
        alice = make_user("Alice", super_likes_remaining=0)
        await (await unit_env.get(UserRepository)).save(alice)

        # Act & Assert
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(QuotaExhaustedError):
                await (await scope.get(UserService)).reserve_super_like()

    @pytest.mark.asyncio
    async def test_upgrade_sets_premium_sentinel(self, unit_env):
        """Premium users show the sentinel count and are never reset."""
        # Arrange
        alice = make_user("Alice", super_likes_remaining=0)
        await (await unit_env.get(UserRepository)).save(alice)

        async with session_scope(unit_env, alice.id) as scope:
            user_service = await scope.get(UserService)

            # Act
            upgraded = await user_service.upgrade_to_premium()
            (await scope.get(FixedClock)).advance(days=3)
            status = await user_service.get_quota_status()

        # Assert
        assert upgraded.is_premium is True
        assert status.is_premium is True
        assert status.remaining == 999
