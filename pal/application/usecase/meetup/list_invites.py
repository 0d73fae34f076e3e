"""List meetup invites use case."""

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.meetup.create_invite import InviteItem
from pal.domain.service import MeetupService


class ListInvitesResponse(BaseModel):
    sent: list[InviteItem]
    received: list[InviteItem]


class ListInvitesUseCase(BaseUseCase):
    """Use case for listing the session user's sent and received invites."""

    def __init__(self, meetup_service: MeetupService) -> None:
        self.meetup_service = meetup_service

    async def execute(self, request: None = None) -> ListInvitesResponse:
        sent = await self.meetup_service.list_sent()
        received = await self.meetup_service.list_received()
        return ListInvitesResponse(
            sent=[InviteItem.from_invite(i) for i in sent],
            received=[InviteItem.from_invite(i) for i in received],
        )
