"""Respond to meetup invite use case."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, model_validator

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.meetup.create_invite import InviteItem
from pal.domain.service import MeetupService
from pal.domain.value import MeetupInviteId


class InviteAction(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"
    PROPOSE_TIME = "propose_time"
    ACCEPT_PROPOSED_TIME = "accept_proposed_time"
    CANCEL = "cancel"


class RespondToInviteRequest(BaseModel):
    invite_id: str
    action: InviteAction
    proposed_at: Optional[datetime] = None  # Required for propose_time

    @model_validator(mode="after")
    def validate_proposed_at(self) -> "RespondToInviteRequest":
        if self.action == InviteAction.PROPOSE_TIME and self.proposed_at is None:
            raise ValueError("proposed_at is required to propose a new time")
        return self


class RespondToInviteUseCase(BaseUseCase):
    """Use case for moving a meetup invite through its state machine."""

    def __init__(self, meetup_service: MeetupService) -> None:
        self.meetup_service = meetup_service

    async def execute(self, request: RespondToInviteRequest) -> InviteItem:
        """Apply the requested action.

        Raises:
            NotFoundError: If the invite does not exist
            NotAuthorizedError: If the session user's role does not allow it
            InvalidTransitionError: If the invite's status does not allow it
            InvalidProposedTimeError: If a proposed time is not in the future
        """
        invite_id = MeetupInviteId(UUID(request.invite_id))
        service = self.meetup_service

        if request.action == InviteAction.ACCEPT:
            invite = await service.accept_invite(invite_id)
        elif request.action == InviteAction.DECLINE:
            invite = await service.decline_invite(invite_id)
        elif request.action == InviteAction.PROPOSE_TIME:
            invite = await service.propose_time_change(invite_id, request.proposed_at)
        elif request.action == InviteAction.ACCEPT_PROPOSED_TIME:
            invite = await service.accept_proposed_time(invite_id)
        else:
            invite = await service.cancel_invite(invite_id)

        return InviteItem.from_invite(invite)
