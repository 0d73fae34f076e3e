"""Session context.

One object per signed-in user session, handed to every session-aware
service at construction time.
"""

from datetime import datetime

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import UserId
from pal.util.clock import utc_now


class SessionContext(DomainModel):
    """The current user's session."""

    user_id: UserId
    started_at: datetime = Field(default_factory=utc_now)
