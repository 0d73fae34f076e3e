"""Meetup coordination domain service."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import logfire

from pal.adapter.error import UpstreamUnavailableError
from pal.domain.error import (
    ConcurrentModificationError,
    InvalidProposedTimeError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from pal.domain.model import MeetupInvite, SessionContext
from pal.domain.repository import MatchRepository, MeetupInviteRepository
from pal.domain.value import MatchId, MatchStatus, MeetupInviteId, MeetupStatus, Place
from pal.util.clock import Clock

from .base import Service


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MeetupService(Service):
    """Domain service for the meetup invite state machine.

    pending -> accepted | declined | proposed_change | cancelled
    proposed_change -> accepted | declined | cancelled

    Receiver answers a pending invite; the original sender answers a
    proposed time change. Either party may cancel a non-terminal invite.
    """

    def __init__(
        self,
        session: SessionContext,
        meetup_repository: MeetupInviteRepository,
        match_repository: MatchRepository,
        clock: Clock,
    ) -> None:
        """Initialize meetup service.

        Args:
            session: Current user session
            meetup_repository: Meetup invite repository
            match_repository: Match repository (invites need an accepted match)
            clock: Time source
        """
        self.session = session
        self.meetup_repository = meetup_repository
        self.match_repository = match_repository
        self.clock = clock

    async def create_invite(
        self,
        match_id: MatchId,
        place: Place,
        scheduled_at: datetime,
        message: Optional[str] = None,
    ) -> MeetupInvite:
        """Invite the other participant of an accepted match to meet.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the session user is not a participant
            ValidationError: If the match is not accepted
            InvalidProposedTimeError: If the time is not in the future
        """
        user_id = self.session.user_id
        with logfire.span(
            "meetup_service.create_invite",
            user_id=str(user_id),
            match_id=str(match_id),
        ):
            match = await self.match_repository.find_by_id(match_id)
            if not match:
                raise NotFoundError("Match", str(match_id))
            if not match.involves(user_id):
                raise NotAuthorizedError(
                    "invite", "match", str(match_id), str(user_id)
                )
            if match.status != MatchStatus.ACCEPTED or match.retracted_at is not None:
                raise ValidationError("Meetups can only be planned for accepted matches")

            scheduled_at = _as_utc(scheduled_at)
            now = self.clock.now()
            if scheduled_at <= now:
                raise InvalidProposedTimeError(scheduled_at.isoformat(), now.isoformat())

            invite = MeetupInvite(
                id=MeetupInviteId(uuid4()),
                match_id=match_id,
                sender_id=user_id,
                receiver_id=match.other_party(user_id),
                place=place,
                scheduled_at=scheduled_at,
                message=message,
                status=MeetupStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            saved = await self.meetup_repository.save(invite)
            logfire.info(
                "Meetup invite created",
                invite_id=str(saved.id),
                match_id=str(match_id),
                sender_id=str(user_id),
                receiver_id=str(saved.receiver_id),
            )
            return saved

    async def accept_invite(self, invite_id: MeetupInviteId) -> MeetupInvite:
        """Receiver accepts a pending invite.

        Raises:
            NotAuthorizedError: If the session user is not the receiver
            InvalidTransitionError: If the invite is not pending
        """
        with logfire.span(
            "meetup_service.accept_invite",
            user_id=str(self.session.user_id),
            invite_id=str(invite_id),
        ):
            invite = await self.get_invite(invite_id)
            self._require_receiver(invite, "accept")
            self._require_status(invite, MeetupStatus.ACCEPTED, MeetupStatus.PENDING)
            return await self._transition(invite, status=MeetupStatus.ACCEPTED)

    async def decline_invite(self, invite_id: MeetupInviteId) -> MeetupInvite:
        """Decline an invite.

        The receiver may decline a pending invite; either party may decline a
        proposed time change.

        Raises:
            NotAuthorizedError: If the session user may not decline it
            InvalidTransitionError: If the invite is terminal
        """
        user_id = self.session.user_id
        with logfire.span(
            "meetup_service.decline_invite",
            user_id=str(user_id),
            invite_id=str(invite_id),
        ):
            invite = await self.get_invite(invite_id)
            if invite.status == MeetupStatus.PENDING:
                self._require_receiver(invite, "decline")
            self._require_status(
                invite,
                MeetupStatus.DECLINED,
                MeetupStatus.PENDING,
                MeetupStatus.PROPOSED_CHANGE,
            )
            return await self._transition(
                invite, status=MeetupStatus.DECLINED, proposed_at=None
            )

    async def propose_time_change(
        self, invite_id: MeetupInviteId, proposed_at: datetime
    ) -> MeetupInvite:
        """Receiver proposes a different time for a pending invite.

        Raises:
            NotAuthorizedError: If the session user is not the receiver
            InvalidTransitionError: If the invite is not pending
            InvalidProposedTimeError: If the time is not strictly in the future
        """
        with logfire.span(
            "meetup_service.propose_time_change",
            user_id=str(self.session.user_id),
            invite_id=str(invite_id),
        ):
            invite = await self.get_invite(invite_id)
            self._require_receiver(invite, "propose a new time for")
            self._require_status(
                invite, MeetupStatus.PROPOSED_CHANGE, MeetupStatus.PENDING
            )

            proposed_at = _as_utc(proposed_at)
            now = self.clock.now()
            if proposed_at <= now:
                logfire.warn(
                    "Proposed meetup time not in the future",
                    invite_id=str(invite_id),
                    proposed_at=proposed_at.isoformat(),
                )
                raise InvalidProposedTimeError(proposed_at.isoformat(), now.isoformat())

            return await self._transition(
                invite, status=MeetupStatus.PROPOSED_CHANGE, proposed_at=proposed_at
            )

    async def accept_proposed_time(self, invite_id: MeetupInviteId) -> MeetupInvite:
        """Original sender accepts the receiver's proposed time.

        The proposal becomes the scheduled time and is cleared.

        Raises:
            NotAuthorizedError: If the session user is not the sender
            InvalidTransitionError: If no time change is pending
        """
        with logfire.span(
            "meetup_service.accept_proposed_time",
            user_id=str(self.session.user_id),
            invite_id=str(invite_id),
        ):
            invite = await self.get_invite(invite_id)
            if invite.sender_id != self.session.user_id:
                raise NotAuthorizedError(
                    "accept proposed time for",
                    "meetup invite",
                    str(invite_id),
                    str(self.session.user_id),
                )
            self._require_status(
                invite, MeetupStatus.ACCEPTED, MeetupStatus.PROPOSED_CHANGE
            )
            return await self._transition(
                invite,
                status=MeetupStatus.ACCEPTED,
                scheduled_at=invite.proposed_at,
                proposed_at=None,
            )

    async def cancel_invite(self, invite_id: MeetupInviteId) -> MeetupInvite:
        """Either participant cancels a non-terminal invite.

        Raises:
            InvalidTransitionError: If the invite is already terminal
        """
        with logfire.span(
            "meetup_service.cancel_invite",
            user_id=str(self.session.user_id),
            invite_id=str(invite_id),
        ):
            invite = await self.get_invite(invite_id)
            self._require_status(
                invite,
                MeetupStatus.CANCELLED,
                MeetupStatus.PENDING,
                MeetupStatus.PROPOSED_CHANGE,
            )
            return await self._transition(
                invite, status=MeetupStatus.CANCELLED, proposed_at=None
            )

    async def get_invite(self, invite_id: MeetupInviteId) -> MeetupInvite:
        """Get an invite the session user participates in.

        Raises:
            NotFoundError: If the invite does not exist
            NotAuthorizedError: If the session user is not a participant
        """
        invite = await self.meetup_repository.find_by_id(invite_id)
        if not invite:
            raise NotFoundError("MeetupInvite", str(invite_id))
        if not invite.involves(self.session.user_id):
            raise NotAuthorizedError(
                "view", "meetup invite", str(invite_id), str(self.session.user_id)
            )
        return invite

    async def list_sent(self) -> list[MeetupInvite]:
        """Invites sent by the session user, newest first."""
        try:
            return await self.meetup_repository.find_by_sender(self.session.user_id)
        except UpstreamUnavailableError as e:
            logfire.warn("Sent invite listing degraded to empty result", error=str(e))
            return []

    async def list_received(self) -> list[MeetupInvite]:
        """Invites received by the session user, newest first."""
        try:
            return await self.meetup_repository.find_by_receiver(self.session.user_id)
        except UpstreamUnavailableError as e:
            logfire.warn(
                "Received invite listing degraded to empty result", error=str(e)
            )
            return []

    def _require_receiver(self, invite: MeetupInvite, action: str) -> None:
        if invite.receiver_id != self.session.user_id:
            raise NotAuthorizedError(
                action, "meetup invite", str(invite.id), str(self.session.user_id)
            )

    def _require_status(
        self, invite: MeetupInvite, target: MeetupStatus, *allowed: MeetupStatus
    ) -> None:
        if invite.status not in allowed:
            logfire.warn(
                "Invalid meetup transition",
                invite_id=str(invite.id),
                current=invite.status.value,
                target=target.value,
            )
            raise InvalidTransitionError(
                "MeetupInvite", str(invite.id), invite.status.value, target.value
            )

    async def _transition(self, invite: MeetupInvite, **changes) -> MeetupInvite:
        """Write the new state with a compare-and-swap on ``revision``."""
        data = invite.model_dump()
        data.update(changes)
        data["revision"] = invite.revision + 1
        data["updated_at"] = self.clock.now()
        updated = MeetupInvite.model_validate(data)

        if not await self.meetup_repository.compare_and_swap(updated, invite.revision):
            logfire.warn("Meetup invite changed concurrently", invite_id=str(invite.id))
            raise ConcurrentModificationError(
                "MeetupInvite",
                str(invite.id),
                invite.status.value,
                updated.status.value,
            )

        logfire.info(
            "Meetup invite updated",
            invite_id=str(invite.id),
            previous=invite.status.value,
            status=updated.status.value,
        )
        return updated
