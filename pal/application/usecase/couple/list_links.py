"""List couple links use case."""

from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.couple.request_link import CoupleLinkItem
from pal.domain.service import CoupleService


class CoupleLinksResponse(BaseModel):
    current: Optional[CoupleLinkItem]
    pending: list[CoupleLinkItem]


class ListCoupleLinksUseCase(BaseUseCase):
    """The session user's confirmed link and open requests."""

    def __init__(self, couple_service: CoupleService) -> None:
        self.couple_service = couple_service

    async def execute(self, request: None = None) -> CoupleLinksResponse:
        service = self.couple_service
        current = await service.get_current()
        pending = await service.list_pending()
        links = pending + ([current] if current else [])
        partners = await service.get_partners(links)

        def item(link):
            return CoupleLinkItem.from_link(
                link, service.user_id, partners.get(link.other_party(service.user_id))
            )

        return CoupleLinksResponse(
            current=item(current) if current else None,
            pending=[item(link) for link in pending],
        )
