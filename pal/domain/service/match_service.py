"""Match lifecycle domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from pal.adapter.error import UpstreamUnavailableError
from pal.config import MatchingSettings
from pal.domain.error import (
    ConcurrentModificationError,
    DuplicateProposalError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    NothingToUndoError,
    PremiumRequiredError,
    ValidationError,
)
from pal.domain.model import Match, SessionContext, SwipeAction
from pal.domain.repository import MatchRepository, SwipeActionRepository
from pal.domain.value import MatchId, MatchStatus, SwipeDecision, UserId
from pal.util.clock import Clock

from .base import Service
from .user_service import UserService


class MatchService(Service):
    """Domain service owning the match state machine for the session user.

    pending -> accepted | declined, both terminal. Likes and super-likes
    create proposals; the receiver's like accepts, their skip declines.
    """

    def __init__(
        self,
        session: SessionContext,
        match_repository: MatchRepository,
        swipe_action_repository: SwipeActionRepository,
        user_service: UserService,
        clock: Clock,
        matching_settings: MatchingSettings,
    ) -> None:
        """Initialize match service.

        Args:
            session: Current user session
            match_repository: Match repository
            swipe_action_repository: Last-action store for undo
            user_service: User domain service (quota, premium status)
            clock: Time source
            matching_settings: Match lifecycle configuration
        """
        self.session = session
        self.match_repository = match_repository
        self.swipe_action_repository = swipe_action_repository
        self.user_service = user_service
        self.clock = clock
        self.matching_settings = matching_settings

    @property
    def user_id(self) -> UserId:
        return self.session.user_id

    async def like_candidate(self, target_id: UserId) -> Match:
        """Like another user.

        Creates a pending proposal, or accepts the target's pending proposal
        towards the session user if there is one.

        Args:
            target_id: User being liked

        Returns:
            The new pending match, or the accepted reciprocal match

        Raises:
            DuplicateProposalError: If an active match already exists
            NotFoundError: If the target user does not exist
        """
        with logfire.span(
            "match_service.like_candidate",
            user_id=str(self.user_id),
            target_id=str(target_id),
        ):
            return await self._propose(target_id, super_like=False)

    async def super_like_candidate(self, target_id: UserId) -> Match:
        """Super-like another user.

        Free users spend one super-like from their daily quota once the
        proposal is stored; premium users are not charged. A super-like
        towards someone whose proposal is waiting on the session user accepts
        that proposal like a plain like does and costs nothing.

        Raises:
            QuotaExhaustedError: If the free quota is used up for today
            DuplicateProposalError: If an active match already exists
            NotFoundError: If the target user does not exist
        """
        with logfire.span(
            "match_service.super_like_candidate",
            user_id=str(self.user_id),
            target_id=str(target_id),
        ):
            await self.user_service.ensure_super_like_available()
            incoming = await self._check_can_propose(target_id)
            if incoming:
                return await self._accept_incoming(incoming)

            match = await self._insert_proposal(target_id, super_like=True)
            await self.user_service.reserve_super_like()
            return match

    async def skip_candidate(self, target_id: UserId) -> Optional[Match]:
        """Skip another user.

        Declines the target's pending proposal towards the session user.

        Returns:
            The declined match, or None if there was nothing to decline
        """
        with logfire.span(
            "match_service.skip_candidate",
            user_id=str(self.user_id),
            target_id=str(target_id),
        ):
            incoming = await self.match_repository.find_active(target_id, self.user_id)
            if not incoming or incoming.status != MatchStatus.PENDING:
                logfire.info("Skip with no incoming proposal", target_id=str(target_id))
                return None
            return await self._respond(incoming, SwipeDecision.DECLINED)

    async def accept_match(self, match_id: MatchId) -> Match:
        """Accept a pending match.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user may not respond to it
            InvalidTransitionError: If the match is not pending
        """
        with logfire.span(
            "match_service.accept_match",
            user_id=str(self.user_id),
            match_id=str(match_id),
        ):
            match = await self._get_for_response(match_id, "accept")
            return await self._respond(match, SwipeDecision.ACCEPTED)

    async def decline_match(self, match_id: MatchId) -> Match:
        """Decline a pending match.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user may not respond to it
            InvalidTransitionError: If the match is not pending
        """
        with logfire.span(
            "match_service.decline_match",
            user_id=str(self.user_id),
            match_id=str(match_id),
        ):
            match = await self._get_for_response(match_id, "decline")
            return await self._respond(match, SwipeDecision.DECLINED)

    async def undo_last_action(self) -> Match:
        """Undo the session user's last accept/decline (premium only).

        The answered record keeps its terminal status and is marked retracted;
        a fresh pending record for the same pair takes its place. If either
        side has opened a newer active match for the pair since, the action
        is stale and is dropped without touching any record.

        Returns:
            The reopened pending match

        Raises:
            PremiumRequiredError: If the user is not premium
            NothingToUndoError: If no action is recorded, or it is stale
            ConcurrentModificationError: If the pair changed during the undo
        """
        with logfire.span("match_service.undo_last_action", user_id=str(self.user_id)):
            user = await self.user_service.get_current_user()
            if not user.is_premium:
                logfire.warn("Undo attempted by free user", user_id=str(self.user_id))
                raise PremiumRequiredError("Undo")

            last = await self.swipe_action_repository.find_last(self.user_id)
            if not last:
                raise NothingToUndoError()

            match = await self.match_repository.find_by_id(last.match_id)
            if not match or match.retracted_at is not None:
                await self.swipe_action_repository.clear(self.user_id)
                raise NothingToUndoError()

            newer = await self._find_newer_active(match)
            if newer:
                logfire.warn(
                    "Undo of superseded action dropped",
                    user_id=str(self.user_id),
                    match_id=str(match.id),
                    newer_match_id=str(newer.id),
                )
                await self.swipe_action_repository.clear(self.user_id)
                raise NothingToUndoError()

            now = self.clock.now()
            retracted = match.model_copy(
                update={
                    "retracted_at": now,
                    "revision": match.revision + 1,
                    "updated_at": now,
                }
            )
            if not await self.match_repository.compare_and_swap(
                retracted, match.revision
            ):
                raise ConcurrentModificationError(
                    "Match", str(match.id), match.status.value, "retracted"
                )

            try:
                reopened = await self.match_repository.save(
                    Match(
                        id=MatchId(uuid4()),
                        initiator_id=match.initiator_id,
                        target_id=match.target_id,
                        status=MatchStatus.PENDING,
                        is_super_like=match.is_super_like,
                        reopened_from=match.id,
                        created_at=now,
                        updated_at=now,
                    )
                )
            except IntegrityError:
                # A proposal for the pair landed between the check and the insert
                await self.match_repository.compare_and_swap(
                    match.model_copy(update={"revision": retracted.revision + 1}),
                    retracted.revision,
                )
                logfire.warn("Undo lost a race on reopen", match_id=str(match.id))
                raise ConcurrentModificationError(
                    "Match", str(match.id), match.status.value, "retracted"
                )
            await self.swipe_action_repository.clear(self.user_id)

            logfire.info(
                "Last action undone",
                user_id=str(self.user_id),
                retracted_match_id=str(match.id),
                reopened_match_id=str(reopened.id),
                undone_decision=last.decision.value,
            )
            return reopened

    async def get_match(self, match_id: MatchId) -> Match:
        """Get a match the session user participates in.

        Raises:
            NotFoundError: If the match does not exist or is not visible
        """
        match = await self.match_repository.find_by_id(match_id)
        if not match or not match.involves(self.user_id):
            raise NotFoundError("Match", str(match_id))
        return match

    async def list_incoming(self) -> list[Match]:
        """Pending proposals waiting for the session user's answer."""
        matches = await self._list_for_user(MatchStatus.PENDING)
        return [m for m in matches if m.target_id == self.user_id and m.is_active]

    async def list_outgoing(self) -> list[Match]:
        """Pending proposals the session user sent."""
        matches = await self._list_for_user(MatchStatus.PENDING)
        return [m for m in matches if m.initiator_id == self.user_id and m.is_active]

    async def list_accepted(self) -> list[Match]:
        """Accepted matches (friends) of the session user."""
        matches = await self._list_for_user(MatchStatus.ACCEPTED)
        return [m for m in matches if m.is_active]

    async def _list_for_user(self, status: MatchStatus) -> list[Match]:
        try:
            return await self.match_repository.find_for_user(self.user_id, status)
        except UpstreamUnavailableError as e:
            logfire.warn(
                "Match listing degraded to empty result",
                user_id=str(self.user_id),
                status=status.value,
                error=str(e),
            )
            return []

    async def _find_newer_active(self, match: Match) -> Optional[Match]:
        """Active record for the pair, in either direction, other than ``match``."""
        for initiator_id, target_id in (
            (match.initiator_id, match.target_id),
            (match.target_id, match.initiator_id),
        ):
            active = await self.match_repository.find_active(initiator_id, target_id)
            if active and active.id != match.id:
                return active
        return None

    async def _check_can_propose(self, target_id: UserId) -> Optional[Match]:
        """Validate a like towards ``target_id``.

        Returns:
            The target's pending proposal towards the session user, if any

        Raises:
            ValidationError: On self-likes
            NotFoundError: If the target does not exist
            DuplicateProposalError: If an active match already exists
        """
        if target_id == self.user_id:
            raise ValidationError("Users cannot like themselves")

        target = await self.user_service.get_user_by_id(target_id)
        if not target:
            raise NotFoundError("User", str(target_id))

        outgoing = await self.match_repository.find_active(self.user_id, target_id)
        if outgoing:
            logfire.warn(
                "Duplicate proposal",
                user_id=str(self.user_id),
                target_id=str(target_id),
                existing_match_id=str(outgoing.id),
            )
            raise DuplicateProposalError(str(self.user_id), str(target_id))

        incoming = await self.match_repository.find_active(target_id, self.user_id)
        if incoming and incoming.status == MatchStatus.ACCEPTED:
            raise DuplicateProposalError(str(self.user_id), str(target_id))
        return incoming

    async def _propose(self, target_id: UserId, super_like: bool) -> Match:
        incoming = await self._check_can_propose(target_id)
        if incoming:
            return await self._accept_incoming(incoming)
        return await self._insert_proposal(target_id, super_like)

    async def _accept_incoming(self, incoming: Match) -> Match:
        logfire.info(
            "Like answers incoming proposal",
            user_id=str(self.user_id),
            match_id=str(incoming.id),
        )
        return await self._respond(incoming, SwipeDecision.ACCEPTED)

    async def _insert_proposal(self, target_id: UserId, super_like: bool) -> Match:
        now = self.clock.now()
        match = Match(
            id=MatchId(uuid4()),
            initiator_id=self.user_id,
            target_id=target_id,
            status=MatchStatus.PENDING,
            is_super_like=super_like,
            created_at=now,
            updated_at=now,
        )
        try:
            saved = await self.match_repository.save(match)
        except IntegrityError:
            logfire.warn(
                "Duplicate proposal on insert",
                user_id=str(self.user_id),
                target_id=str(target_id),
            )
            raise DuplicateProposalError(str(self.user_id), str(target_id))

        logfire.info(
            "Match proposed",
            match_id=str(saved.id),
            user_id=str(self.user_id),
            target_id=str(target_id),
            super_like=super_like,
        )
        return saved

    async def _get_for_response(self, match_id: MatchId, action: str) -> Match:
        match = await self.match_repository.find_by_id(match_id)
        if not match:
            raise NotFoundError("Match", str(match_id))
        if not match.involves(self.user_id):
            raise NotAuthorizedError(action, "match", str(match_id), str(self.user_id))
        if (
            self.matching_settings.require_receiver_consent
            and match.target_id != self.user_id
        ):
            raise NotAuthorizedError(action, "match", str(match_id), str(self.user_id))
        return match

    async def _respond(self, match: Match, decision: SwipeDecision) -> Match:
        """Move a pending match to a terminal status and remember the action."""
        target_status = (
            MatchStatus.ACCEPTED
            if decision == SwipeDecision.ACCEPTED
            else MatchStatus.DECLINED
        )
        if match.status != MatchStatus.PENDING or match.retracted_at is not None:
            logfire.warn(
                "Invalid match transition",
                match_id=str(match.id),
                current=match.status.value,
                target=target_status.value,
            )
            raise InvalidTransitionError(
                "Match", str(match.id), match.status.value, target_status.value
            )

        now = self.clock.now()
        updated = match.model_copy(
            update={
                "status": target_status,
                "revision": match.revision + 1,
                "updated_at": now,
            }
        )
        if not await self.match_repository.compare_and_swap(updated, match.revision):
            logfire.warn("Match changed concurrently", match_id=str(match.id))
            raise ConcurrentModificationError(
                "Match", str(match.id), match.status.value, target_status.value
            )

        await self.swipe_action_repository.record(
            SwipeAction(
                user_id=self.user_id,
                match_id=match.id,
                decision=decision,
                performed_at=now,
            )
        )
        logfire.info(
            "Match answered",
            match_id=str(match.id),
            user_id=str(self.user_id),
            status=target_status.value,
        )
        return updated
