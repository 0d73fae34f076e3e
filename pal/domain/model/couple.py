"""Couple link entity.

Two users in a relationship can link their accounts. One side requests the
link by the partner's email; it shows on both profiles once the partner
confirms.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from pal.domain.model.common import DomainModel
from pal.domain.value import CoupleLinkId, RelationshipStatus, UserId
from pal.util.clock import utc_now


class CoupleLink(DomainModel):
    """Couple link entity.

    Business rules:
    - At most one link per pair of users, whichever side asked
    - linked_at is set exactly when the link is confirmed
    - Cancelling a request or unlinking deletes the link
    """

    id: CoupleLinkId
    requester_id: UserId
    partner_id: UserId
    relationship: RelationshipStatus = RelationshipStatus.COUPLE
    confirmed: bool = False
    linked_at: Optional[datetime] = None
    revision: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_link(self) -> "CoupleLink":
        if self.requester_id == self.partner_id:
            raise ValueError("A user cannot be linked with themselves")
        if self.confirmed != (self.linked_at is not None):
            raise ValueError("linked_at must be set exactly when confirmed")
        return self

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.requester_id, self.partner_id)

    def other_party(self, user_id: UserId) -> UserId:
        return self.partner_id if user_id == self.requester_id else self.requester_id

    def is_incoming_for(self, user_id: UserId) -> bool:
        """True if ``user_id`` is the one who has to confirm."""
        return not self.confirmed and self.partner_id == user_id
