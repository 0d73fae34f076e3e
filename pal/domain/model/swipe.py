"""Swipe action entity.

Records the most recent accept/decline made by a user so it can be undone.
"""

from datetime import datetime

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import MatchId, SwipeDecision, UserId
from pal.util.clock import utc_now


class SwipeAction(DomainModel):
    """A user's last response to a match proposal."""

    user_id: UserId
    match_id: MatchId
    decision: SwipeDecision
    performed_at: datetime = Field(default_factory=utc_now)
