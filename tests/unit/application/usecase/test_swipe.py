"""Unit tests for SwipeUseCase and RespondToMatchUseCase."""

import pytest

from pal.application.usecase.match import (
    ListMatchesRequest,
    ListMatchesUseCase,
    MatchListKind,
    RespondToMatchRequest,
    RespondToMatchUseCase,
    SwipeAction,
    SwipeRequest,
    SwipeUseCase,
)
from pal.domain.repository import UserRepository
from pal.domain.value import MatchStatus, SwipeDecision
from tests.conftest import make_user
from tests.harness import create_env_fixture, session_scope

unit_env = create_env_fixture()


class TestSwipeUseCase:
    """Tests for SwipeUseCase."""

    @pytest.mark.asyncio
    async def test_super_like_reports_remaining_quota(self, unit_env):
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(alice)
        await user_repo.save(bob)

        # Act
        async with session_scope(unit_env, alice.id) as scope:
            response = await (await scope.get(SwipeUseCase)).execute(
                SwipeRequest(target_user_id=str(bob.id), action=SwipeAction.SUPER_LIKE)
            )

        # Assert
        assert response.match.is_super_like is True
        assert response.match.other_user_id == str(bob.id)
        assert response.super_likes_remaining == 0

    @pytest.mark.asyncio
    async def test_skip_without_proposal_returns_no_match(self, unit_env):
        alice, bob = make_user("Alice"), make_user("Bob")
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(alice)
        await user_repo.save(bob)

        async with session_scope(unit_env, alice.id) as scope:
            response = await (await scope.get(SwipeUseCase)).execute(
                SwipeRequest(target_user_id=str(bob.id), action=SwipeAction.SKIP)
            )

        assert response.match is None
        assert response.super_likes_remaining == 1

    @pytest.mark.asyncio
    async def test_like_then_accept_via_use_cases(self, unit_env):
        """Full flow through the application layer."""
        # Arrange
        alice, bob = make_user("Alice"), make_user("Bob")
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(alice)
        await user_repo.save(bob)

        async with session_scope(unit_env, alice.id) as scope:
            liked = await (await scope.get(SwipeUseCase)).execute(
                SwipeRequest(target_user_id=str(bob.id), action=SwipeAction.LIKE)
            )

        # Act
        async with session_scope(unit_env, bob.id) as scope:
            incoming = await (await scope.get(ListMatchesUseCase)).execute(
                ListMatchesRequest(kind=MatchListKind.INCOMING)
            )
            accepted = await (await scope.get(RespondToMatchUseCase)).execute(
                RespondToMatchRequest(
                    match_id=incoming.matches[0].match_id,
                    decision=SwipeDecision.ACCEPTED,
                )
            )

        # Assert
        assert incoming.matches[0].match_id == liked.match.match_id
        assert accepted.status == MatchStatus.ACCEPTED
        assert accepted.other_user_id == str(alice.id)
