"""Notification feed use cases: open, read and close the session user's feed."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.domain.model import SessionContext
from pal.domain.service import NotificationHub, NotificationRelay
from pal.domain.value import NotificationKind


class NotificationItem(BaseModel):
    id: str
    kind: NotificationKind
    content: str
    related_user_id: Optional[str]
    is_read: bool
    action_url: Optional[str]
    created_at: datetime


class NotificationFeedResponse(BaseModel):
    """Notifications newest first, with the unread badge count."""

    subscribed: bool
    unread_count: int
    notifications: list[NotificationItem]

    @classmethod
    def from_relay(cls, relay: Optional[NotificationRelay]) -> "NotificationFeedResponse":
        if relay is None:
            return cls(subscribed=False, unread_count=0, notifications=[])
        return cls(
            subscribed=relay.active,
            unread_count=relay.unread_count,
            notifications=[
                NotificationItem(
                    id=n.id,
                    kind=n.kind,
                    content=n.content,
                    related_user_id=str(n.related_user_id) if n.related_user_id else None,
                    is_read=n.is_read,
                    action_url=n.action_url,
                    created_at=n.created_at,
                )
                for n in relay.notifications
            ],
        )


class OpenNotificationFeedUseCase(BaseUseCase):
    """Start relaying notifications for the session user."""

    def __init__(self, notification_hub: NotificationHub, session: SessionContext) -> None:
        self.notification_hub = notification_hub
        self.session = session

    async def execute(self, request: None = None) -> NotificationFeedResponse:
        """Raises UpstreamUnavailableError if the change feed is unreachable."""
        relay = await self.notification_hub.open(self.session)
        return NotificationFeedResponse.from_relay(relay)


class GetNotificationsUseCase(BaseUseCase):
    """Read the session user's notifications without changing them."""

    def __init__(self, notification_hub: NotificationHub, session: SessionContext) -> None:
        self.notification_hub = notification_hub
        self.session = session

    async def execute(self, request: None = None) -> NotificationFeedResponse:
        relay = await self.notification_hub.get(self.session.user_id)
        return NotificationFeedResponse.from_relay(relay)


class CloseNotificationFeedUseCase(BaseUseCase):
    """Stop relaying notifications for the session user."""

    def __init__(self, notification_hub: NotificationHub, session: SessionContext) -> None:
        self.notification_hub = notification_hub
        self.session = session

    async def execute(self, request: None = None) -> bool:
        return await self.notification_hub.close(self.session.user_id)
