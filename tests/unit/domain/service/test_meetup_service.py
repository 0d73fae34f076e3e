"""Unit tests for MeetupService."""

from datetime import timedelta

import pytest

from pal.domain.error import (
    InvalidProposedTimeError,
    InvalidTransitionError,
    NotAuthorizedError,
    ValidationError,
)
from pal.domain.repository import MatchRepository, MeetupInviteRepository, UserRepository
from pal.domain.service import MeetupService
from pal.domain.value import MatchStatus, MeetupStatus, Place
from tests.conftest import NOW, make_match, make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()

CAFE = Place(name="Blue Door", address="12 Harbour St", category="cafe")
SATURDAY = NOW + timedelta(days=5)


async def _friends(unit_env, status=MatchStatus.ACCEPTED):
    alice, bob = make_user("Alice"), make_user("Bob")
    user_repo = await unit_env.get(UserRepository)
    await user_repo.save(alice)
    await user_repo.save(bob)
    match = await (await unit_env.get(MatchRepository)).save(
        make_match(alice.id, bob.id, status)
    )
    return alice, bob, match


async def _invite(unit_env, sender, match):
    async with session_scope(unit_env, sender.id) as scope:
        return await (await scope.get(MeetupService)).create_invite(
            match.id, CAFE, SATURDAY, message="Brunch?"
        )


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_create_invite_for_accepted_match(self, unit_env):
        # Arrange
        alice, bob, match = await _friends(unit_env)

        # Act
        invite = await _invite(unit_env, alice, match)

        # Assert
        assert invite.sender_id == alice.id
        assert invite.receiver_id == bob.id
        assert invite.status == MeetupStatus.PENDING
        assert invite.scheduled_at == SATURDAY
        assert invite.proposed_at is None

    @pytest.mark.asyncio
    async def test_invite_requires_accepted_match(self, unit_env):
        alice, _, match = await _friends(unit_env, MatchStatus.PENDING)
        with pytest.raises(ValidationError):
            await _invite(unit_env, alice, match)

    @pytest.mark.asyncio
    async def test_invite_in_the_past_is_rejected(self, unit_env):
        alice, _, match = await _friends(unit_env)
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(InvalidProposedTimeError):
                await (await scope.get(MeetupService)).create_invite(
                    match.id, CAFE, NOW - timedelta(hours=1)
                )

    @pytest.mark.asyncio
    async def test_naive_time_is_treated_as_utc(self, unit_env):
        alice, _, match = await _friends(unit_env)
        async with session_scope(unit_env, alice.id) as scope:
            invite = await (await scope.get(MeetupService)).create_invite(
                match.id, CAFE, SATURDAY.replace(tzinfo=None)
            )
        assert invite.scheduled_at == SATURDAY


class TestInviteTransitions:
    """Tests for the invite state machine."""

    @pytest.mark.asyncio
    async def test_propose_then_accept_new_time(self, unit_env):
        """Receiver proposes a time; sender accepts it and it becomes the schedule."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        sunday = SATURDAY + timedelta(days=1)

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            proposed = await (await scope.get(MeetupService)).propose_time_change(
                invite.id, sunday
            )
        async with session_scope(unit_env, alice.id) as scope:
            accepted = await (await scope.get(MeetupService)).accept_proposed_time(
                invite.id
            )

        # Assert
        assert proposed.status == MeetupStatus.PROPOSED_CHANGE
        assert proposed.proposed_at == sunday
        assert accepted.status == MeetupStatus.ACCEPTED
        assert accepted.scheduled_at == sunday
        assert accepted.proposed_at is None
        assert accepted.revision == invite.revision + 2

    @pytest.mark.asyncio
    async def test_proposed_time_must_be_in_future(self, unit_env):
        """A past proposal fails and leaves the invite unchanged."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)

        # Act & Assert
        async with session_scope(unit_env, bob.id) as scope:
            with pytest.raises(InvalidProposedTimeError):
                await (await scope.get(MeetupService)).propose_time_change(
                    invite.id, NOW
                )

        stored = await (await unit_env.get(MeetupInviteRepository)).find_by_id(
            invite.id
        )
        assert stored.status == MeetupStatus.PENDING
        assert stored.proposed_at is None

    @pytest.mark.asyncio
    async def test_sender_cannot_accept_own_invite(self, unit_env):
        alice, _, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        async with session_scope(unit_env, alice.id) as scope:
            with pytest.raises(NotAuthorizedError):
                await (await scope.get(MeetupService)).accept_invite(invite.id)

    @pytest.mark.asyncio
    async def test_receiver_cannot_accept_own_proposal(self, unit_env):
        """Only the original sender answers a proposed change."""
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        async with session_scope(unit_env, bob.id) as scope:
            meetup_service = await scope.get(MeetupService)
            await meetup_service.propose_time_change(
                invite.id, SATURDAY + timedelta(hours=2)
            )
            with pytest.raises(NotAuthorizedError):
                await meetup_service.accept_proposed_time(invite.id)

    @pytest.mark.asyncio
    async def test_terminal_invite_cannot_change(self, unit_env):
        """Declined invites stay declined."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        async with session_scope(unit_env, bob.id) as scope:
            meetup_service = await scope.get(MeetupService)
            await meetup_service.decline_invite(invite.id)

            # Act & Assert
            with pytest.raises(InvalidTransitionError):
                await meetup_service.accept_invite(invite.id)
            with pytest.raises(InvalidTransitionError):
                await meetup_service.cancel_invite(invite.id)

    @pytest.mark.asyncio
    async def test_sender_declines_proposed_change(self, unit_env):
        """Either party may decline a proposal; the proposal is cleared."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        async with session_scope(unit_env, bob.id) as scope:
            await (await scope.get(MeetupService)).propose_time_change(
                invite.id, SATURDAY + timedelta(days=2)
            )

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            declined = await (await scope.get(MeetupService)).decline_invite(invite.id)

        # Assert
        assert declined.status == MeetupStatus.DECLINED
        assert declined.proposed_at is None

    @pytest.mark.asyncio
    async def test_cancel_by_sender(self, unit_env):
        alice, _, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        async with session_scope(unit_env, alice.id) as scope:
            cancelled = await (await scope.get(MeetupService)).cancel_invite(invite.id)
        assert cancelled.status == MeetupStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_stale_write_loses(self, unit_env):
        """A second writer holding an old revision is refused."""
        # Arrange
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)
        repo = await unit_env.get(MeetupInviteRepository)
        async with session_scope(unit_env, bob.id) as scope:
            await (await scope.get(MeetupService)).accept_invite(invite.id)

        # Act
        stale = invite.model_copy(
            update={"status": MeetupStatus.CANCELLED, "revision": invite.revision + 1}
        )
        swapped = await repo.compare_and_swap(stale, invite.revision)

        # Assert
        assert swapped is False
        assert (await repo.find_by_id(invite.id)).status == MeetupStatus.ACCEPTED


class TestListInvites:
    @pytest.mark.asyncio
    async def test_sent_and_received(self, unit_env):
        alice, bob, match = await _friends(unit_env)
        invite = await _invite(unit_env, alice, match)

        async with session_scope(unit_env, alice.id) as scope:
            meetup_service = await scope.get(MeetupService)
            sent = await meetup_service.list_sent()
            received = await meetup_service.list_received()
        async with session_scope(unit_env, bob.id) as scope:
            bob_received = await (await scope.get(MeetupService)).list_received()

        assert [i.id for i in sent] == [invite.id]
        assert received == []
        assert [i.id for i in bob_received] == [invite.id]
