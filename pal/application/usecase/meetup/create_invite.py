"""Create meetup invite use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from pal.application.usecase.base import BaseUseCase
from pal.domain.model import MeetupInvite
from pal.domain.service import MeetupService
from pal.domain.value import MatchId, MeetupStatus, Place


class InviteItem(BaseModel):
    """Meetup invite in responses."""

    invite_id: str
    match_id: str
    sender_id: str
    receiver_id: str
    place: Place
    scheduled_at: datetime
    proposed_at: Optional[datetime]
    message: Optional[str]
    status: MeetupStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_invite(cls, invite: MeetupInvite) -> "InviteItem":
        return cls(
            invite_id=str(invite.id),
            match_id=str(invite.match_id),
            sender_id=str(invite.sender_id),
            receiver_id=str(invite.receiver_id),
            place=invite.place,
            scheduled_at=invite.scheduled_at,
            proposed_at=invite.proposed_at,
            message=invite.message,
            status=invite.status,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )


class CreateInviteRequest(BaseModel):
    match_id: str
    place: Place
    scheduled_at: datetime
    message: Optional[str] = Field(default=None, max_length=1000)


class CreateInviteUseCase(BaseUseCase):
    """Use case for inviting a friend to meet."""

    def __init__(self, meetup_service: MeetupService) -> None:
        self.meetup_service = meetup_service

    async def execute(self, request: CreateInviteRequest) -> InviteItem:
        """Create the invite.

        Raises:
            NotFoundError: If the match does not exist
            ValidationError: If the match is not accepted
            InvalidProposedTimeError: If the time is not in the future
        """
        invite = await self.meetup_service.create_invite(
            match_id=MatchId(UUID(request.match_id)),
            place=request.place,
            scheduled_at=request.scheduled_at,
            message=request.message,
        )
        return InviteItem.from_invite(invite)
