"""Meetup invite entity.

Invites schedule an in-person meetup for an accepted match. The receiver may
counter-propose a different time, which the original sender can accept.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from pal.domain.model.common import DomainModel
from pal.domain.value import MatchId, MeetupInviteId, MeetupStatus, Place, UserId
from pal.util.clock import utc_now


class MeetupInvite(DomainModel):
    """Meetup invite entity.

    ``scheduled_at`` and ``proposed_at`` are stored as the ``datetime`` and
    ``proposed_datetime`` columns.
    """

    id: MeetupInviteId
    match_id: MatchId
    sender_id: UserId
    receiver_id: UserId
    place: Place
    scheduled_at: datetime
    proposed_at: Optional[datetime] = None
    message: Optional[str] = Field(default=None, max_length=1000)
    status: MeetupStatus = MeetupStatus.PENDING
    revision: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_proposal_matches_status(self) -> "MeetupInvite":
        """proposed_at is set if and only if a time change is pending."""
        has_proposal = self.proposed_at is not None
        if has_proposal != (self.status == MeetupStatus.PROPOSED_CHANGE):
            raise ValueError(
                "proposed_at must be set exactly when status is proposed_change"
            )
        return self

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.sender_id, self.receiver_id)
