"""Match entity.

A match is a directed friend proposal from an initiating user to a target
user. Status only ever moves forward: pending -> accepted | declined.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import MatchId, MatchStatus, UserId
from pal.util.clock import utc_now


class Match(DomainModel):
    """Match entity.

    Business rules:
    - At most one active record (pending/accepted, not retracted) per
      initiator/target pair
    - accepted and declined are terminal
    - revision increments on every write (compare-and-swap token)
    - retracted_at marks a record superseded by an undo; it is no longer active
    - reopened_from points at the retracted record an undo replaced
    """

    id: MatchId
    initiator_id: UserId
    target_id: UserId
    status: MatchStatus = MatchStatus.PENDING
    is_super_like: bool = False
    revision: int = Field(default=0, ge=0)
    retracted_at: Optional[datetime] = None
    reopened_from: Optional[MatchId] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.retracted_at is None and self.status in (
            MatchStatus.PENDING,
            MatchStatus.ACCEPTED,
        )

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.initiator_id, self.target_id)

    def other_party(self, user_id: UserId) -> UserId:
        """Return the participant that is not ``user_id``."""
        return self.target_id if user_id == self.initiator_id else self.initiator_id
