"""Confirm, cancel and unlink use cases."""

from uuid import UUID

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.couple.request_link import CoupleLinkItem
from pal.domain.service import CoupleService
from pal.domain.value import CoupleLinkId


class ConfirmCoupleLinkUseCase(BaseUseCase):
    def __init__(self, couple_service: CoupleService) -> None:
        self.couple_service = couple_service

    async def execute(self, request: str) -> CoupleLinkItem:
        """Confirm the link with id ``request``.

        Raises:
            NotFoundError: If the link does not exist
            NotAuthorizedError: If the session user sent the request
            InvalidTransitionError: If the link is already confirmed
        """
        link = await self.couple_service.confirm_link(CoupleLinkId(UUID(request)))
        partners = await self.couple_service.get_partners([link])
        return CoupleLinkItem.from_link(
            link,
            self.couple_service.user_id,
            partners.get(link.requester_id),
        )


class CancelCoupleLinkUseCase(BaseUseCase):
    def __init__(self, couple_service: CoupleService) -> None:
        self.couple_service = couple_service

    async def execute(self, request: str) -> None:
        await self.couple_service.cancel_request(CoupleLinkId(UUID(request)))


class UnlinkCoupleUseCase(BaseUseCase):
    """Remove the session user's confirmed link."""

    def __init__(self, couple_service: CoupleService) -> None:
        self.couple_service = couple_service

    async def execute(self, request: None = None) -> None:
        await self.couple_service.unlink()
