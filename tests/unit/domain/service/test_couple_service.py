"""Unit tests for CoupleService."""

import pytest

from pal.domain.error import (
    DuplicateCoupleLinkError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from pal.domain.repository import CoupleLinkRepository, UserRepository
from pal.domain.service import CoupleService
from pal.domain.value import RelationshipStatus
from pal.util.clock import FixedClock
from tests.conftest import make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()


async def _seed(unit_env, *users):
    user_repo = await unit_env.get(UserRepository)
    for user in users:
        await user_repo.save(user)


def _pair():
    return (
        make_user("Alice", email="alice@example.com"),
        make_user("Bob", email="bob@example.com"),
    )


class TestRequestLink:
    """Tests for request_link."""

    @pytest.mark.asyncio
    async def test_request_by_email_creates_pending_link(self, unit_env):
        # Arrange
        alice, bob = _pair()
        await _seed(unit_env, alice, bob)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            link = await (await scope.get(CoupleService)).request_link(
                "  Bob@Example.com ", RelationshipStatus.MARRIED
            )

        # Assert
        assert link.requester_id == alice.id
        assert link.partner_id == bob.id
        assert link.relationship == RelationshipStatus.MARRIED
        assert link.confirmed is False
        assert link.linked_at is None

    @pytest.mark.asyncio
    async def test_unknown_email_is_not_found(self, unit_env):
        alice, _ = _pair()
        await _seed(unit_env, alice)

        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(NotFoundError):
                await (await scope.get(CoupleService)).request_link(
                    "nobody@example.com", RelationshipStatus.COUPLE
                )

    @pytest.mark.asyncio
    async def test_linking_with_yourself_is_rejected(self, unit_env):
        alice, _ = _pair()
        await _seed(unit_env, alice)

        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(ValidationError):
                await (await scope.get(CoupleService)).request_link(
                    "alice@example.com", RelationshipStatus.COUPLE
                )

    @pytest.mark.asyncio
    async def test_second_request_in_either_direction_is_rejected(self, unit_env):
        """One link per pair, whoever asked first."""
        # Arrange
        alice, bob = _pair()
        await _seed(unit_env, alice, bob)
        async with session_scope(unit_env, alice.id) as scope:
            await (await scope.get(CoupleService)).request_link(
                "bob@example.com", RelationshipStatus.COUPLE
            )

        # Act & Assert
        async with session_scope(unit_env, bob.id) as scope:
            with pytest.raises(DuplicateCoupleLinkError):
                await (await scope.get(CoupleService)).request_link(
                    "alice@example.com", RelationshipStatus.COUPLE
                )

    @pytest.mark.asyncio
    async def test_request_to_linked_user_is_rejected(self, unit_env):
        # Arrange
        alice, bob = _pair()
        carol = make_user("Carol", email="carol@example.com")
        await _seed(unit_env, alice, bob, carol)
        async with session_scope(unit_env, alice.id) as scope:
            link = await (await scope.get(CoupleService)).request_link(
                "bob@example.com", RelationshipStatus.COUPLE
            )
        async with session_scope(unit_env, bob.id) as scope:
            await (await scope.get(CoupleService)).confirm_link(link.id)

        # Act & Assert
        async with session_scope(unit_env, carol.id) as scope:
            with pytest.raises(DuplicateCoupleLinkError):
                await (await scope.get(CoupleService)).request_link(
                    "bob@example.com", RelationshipStatus.COUPLE
                )


class TestConfirmAndCancel:
    """Tests for confirm_link, cancel_request and unlink."""

    async def _requested(self, unit_env):
        alice, bob = _pair()
        await _seed(unit_env, alice, bob)
        async with session_scope(unit_env, alice.id) as scope:
            link = await (await scope.get(CoupleService)).request_link(
                "bob@example.com", RelationshipStatus.COUPLE
            )
        return alice, bob, link

    @pytest.mark.asyncio
    async def test_partner_confirms(self, unit_env):
        # Arrange
        alice, bob, link = await self._requested(unit_env)
        clock = await unit_env.get(FixedClock)

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            confirmed = await (await scope.get(CoupleService)).confirm_link(link.id)

        # Assert
        assert confirmed.confirmed is True
        assert confirmed.linked_at == clock.now()
        for user in (alice, bob):
            async with session_scope(unit_env, user.id) as scope:
                service = await scope.get(CoupleService)
                assert (await service.get_current()).id == link.id
                assert await service.list_pending() == []

    @pytest.mark.asyncio
    async def test_requester_cannot_confirm_own_request(self, unit_env):
        alice, _, link = await self._requested(unit_env)

        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(NotAuthorizedError):
                await (await scope.get(CoupleService)).confirm_link(link.id)

    @pytest.mark.asyncio
    async def test_confirm_twice_is_invalid_transition(self, unit_env):
        _, bob, link = await self._requested(unit_env)

        async with session_scope(unit_env, bob.id) as scope:
            service = await scope.get(CoupleService)
            await service.confirm_link(link.id)
            with pytest.raises(InvalidTransitionError):
                await service.confirm_link(link.id)

    @pytest.mark.asyncio
    async def test_outsider_does_not_see_the_link(self, unit_env):
        _, _, link = await self._requested(unit_env)
        eve = make_user("Eve")
        await _seed(unit_env, eve)

        async with session_scope(unit_env, eve.id) as scope:
            with pytest.raises(NotFoundError):
                await (await scope.get(CoupleService)).cancel_request(link.id)

    @pytest.mark.asyncio
    async def test_pending_lists_direction_for_each_side(self, unit_env):
        # Arrange
        alice, bob, link = await self._requested(unit_env)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            alice_pending = await (await scope.get(CoupleService)).list_pending()
        async with session_scope(unit_env, bob.id) as scope:
            bob_pending = await (await scope.get(CoupleService)).list_pending()

        # Assert
        assert [p.id for p in alice_pending] == [link.id]
        assert alice_pending[0].is_incoming_for(alice.id) is False
        assert bob_pending[0].is_incoming_for(bob.id) is True

    @pytest.mark.asyncio
    async def test_either_side_may_cancel_pending_request(self, unit_env):
        # Arrange
        _, bob, link = await self._requested(unit_env)

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            await (await scope.get(CoupleService)).cancel_request(link.id)

        # Assert
        repo = await unit_env.get(CoupleLinkRepository)
        assert await repo.find_by_id(link.id) is None

    @pytest.mark.asyncio
    async def test_confirmed_link_is_unlinked_not_cancelled(self, unit_env):
        # Arrange
        alice, bob, link = await self._requested(unit_env)
        async with session_scope(unit_env, bob.id) as scope:
            await (await scope.get(CoupleService)).confirm_link(link.id)

        async with session_scope(unit_env, alice.id) as scope:
            service = await scope.get(CoupleService)
            with pytest.raises(InvalidTransitionError):
                await service.cancel_request(link.id)

            # Act
            removed = await service.unlink()

        # Assert
        assert removed.id == link.id
        async with session_scope(unit_env, bob.id) as scope:
            assert await (await scope.get(CoupleService)).get_current() is None

    @pytest.mark.asyncio
    async def test_unlink_without_link_is_not_found(self, unit_env):
        alice, _ = _pair()
        await _seed(unit_env, alice)

        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(NotFoundError):
                await (await scope.get(CoupleService)).unlink()
