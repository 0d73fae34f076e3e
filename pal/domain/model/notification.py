"""Notification entity.

Notifications are an in-session projection of match and message events.
They are never persisted.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pal.domain.model.common import DomainModel
from pal.domain.value import NotificationId, NotificationKind, UserId
from pal.util.clock import utc_now


class Notification(DomainModel):
    """Notification entity."""

    id: NotificationId
    kind: NotificationKind
    content: str
    related_user_id: Optional[UserId] = None
    is_read: bool = False
    action_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
