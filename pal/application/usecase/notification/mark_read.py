"""Mark notifications read use case."""

from typing import Optional

from pydantic import BaseModel

from pal.application.usecase.base import BaseUseCase
from pal.application.usecase.notification.get_notifications import (
    NotificationFeedResponse,
)
from pal.domain.model import SessionContext
from pal.domain.service import NotificationHub
from pal.domain.value import NotificationId


class MarkNotificationsReadRequest(BaseModel):
    """None marks every notification read."""

    notification_id: Optional[str] = None


class MarkNotificationsReadUseCase(BaseUseCase):
    """Mark one or all of the session user's notifications read."""

    def __init__(self, notification_hub: NotificationHub, session: SessionContext) -> None:
        self.notification_hub = notification_hub
        self.session = session

    async def execute(
        self, request: MarkNotificationsReadRequest
    ) -> NotificationFeedResponse:
        relay = await self.notification_hub.get(self.session.user_id)
        if relay is not None:
            if request.notification_id is None:
                relay.mark_all_read()
            else:
                relay.mark_read(NotificationId(request.notification_id))
        return NotificationFeedResponse.from_relay(relay)
