"""Request couple link use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pal.application.usecase.base import BaseUseCase
from pal.domain.model import CoupleLink, User
from pal.domain.service import CoupleService
from pal.domain.value import RelationshipStatus, UserId


class CoupleLinkItem(BaseModel):
    """Couple link as seen by one of its two users."""

    link_id: str
    partner_id: str
    partner_name: str
    partner_email: Optional[str]
    relationship: RelationshipStatus
    confirmed: bool
    is_incoming: bool
    linked_at: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_link(
        cls, link: CoupleLink, viewer_id: UserId, partner: Optional[User]
    ) -> "CoupleLinkItem":
        return cls(
            link_id=str(link.id),
            partner_id=str(link.other_party(viewer_id)),
            partner_name=partner.name if partner else "Unknown",
            partner_email=partner.email if partner else None,
            relationship=link.relationship,
            confirmed=link.confirmed,
            is_incoming=link.is_incoming_for(viewer_id),
            linked_at=link.linked_at,
            created_at=link.created_at,
        )


class RequestCoupleLinkRequest(BaseModel):
    partner_email: str = Field(min_length=1, max_length=255)
    relationship: RelationshipStatus = RelationshipStatus.COUPLE


class RequestCoupleLinkUseCase(BaseUseCase):
    """Use case for asking a partner to link accounts."""

    def __init__(self, couple_service: CoupleService) -> None:
        self.couple_service = couple_service

    async def execute(self, request: RequestCoupleLinkRequest) -> CoupleLinkItem:
        """Send the link request.

        Raises:
            NotFoundError: If nobody is registered under the email
            ValidationError: On a request to oneself
            DuplicateCoupleLinkError: If a link already exists
        """
        link = await self.couple_service.request_link(
            request.partner_email, request.relationship
        )
        partners = await self.couple_service.get_partners([link])
        return CoupleLinkItem.from_link(
            link,
            self.couple_service.user_id,
            partners.get(link.partner_id),
        )
