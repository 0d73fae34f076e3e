"""Notification relay.

Turns change events scoped to one user into in-session notifications and
tracks their read state. Notifications live only as long as the relay.
"""

from typing import Optional

import logfire

from pal.domain.model import (
    ChangeEvent,
    MatchInserted,
    MessageInserted,
    Notification,
    SessionContext,
)
from pal.domain.repository import (
    ChangeFeed,
    ChangeFilter,
    ProfileDirectory,
    Subscription,
)
from pal.domain.value import (
    ChangeType,
    NotificationId,
    NotificationKind,
    StoreTable,
    UserId,
)
from pal.util.clock import Clock

from .base import Service


class NotificationRelay(Service):
    """In-memory, newest-first notification list for the session user.

    Owns its change feed subscriptions: ``start`` acquires them and ``close``
    releases them. Events arriving while closed are lost.
    """

    def __init__(
        self,
        session: SessionContext,
        change_feed: ChangeFeed,
        profile_directory: ProfileDirectory,
        clock: Clock,
        max_notifications: Optional[int] = None,
    ) -> None:
        """Initialize notification relay.

        Args:
            session: Session whose notifications are relayed
            change_feed: Source of row change events
            profile_directory: Display name and participant lookups
            clock: Time source
            max_notifications: Keep at most this many, dropping the oldest
        """
        self.session = session
        self.change_feed = change_feed
        self.profile_directory = profile_directory
        self.clock = clock
        self.max_notifications = max_notifications
        self._notifications: list[Notification] = []
        self._unread_count = 0
        self._subscriptions: list[Subscription] = []

    @property
    def user_id(self) -> UserId:
        return self.session.user_id

    @property
    def notifications(self) -> list[Notification]:
        """Notifications, newest first."""
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return self._unread_count

    @property
    def active(self) -> bool:
        return any(s.active for s in self._subscriptions)

    async def start(self) -> None:
        """Subscribe to match and message inserts relevant to the session user.

        Calling ``start`` on a running relay does nothing.

        Raises:
            UpstreamUnavailableError: If the change feed cannot be reached
        """
        if self.active:
            return

        me = str(self.user_id)
        with logfire.span("notification_relay.start", user_id=me):
            try:
                self._subscriptions.append(
                    await self.change_feed.subscribe(
                        ChangeFilter(
                            table=StoreTable.MATCHES,
                            change_type=ChangeType.INSERT,
                            equals={"target_id": me},
                        ),
                        self._dispatch,
                    )
                )
                self._subscriptions.append(
                    await self.change_feed.subscribe(
                        ChangeFilter(
                            table=StoreTable.MESSAGES,
                            change_type=ChangeType.INSERT,
                            not_equals={"sender_id": me},
                        ),
                        self._dispatch,
                    )
                )
            except Exception:
                await self.close()
                raise
            logfire.info("Notification relay started", user_id=me)

    async def close(self) -> None:
        """Release all subscriptions. Notifications already received are kept."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            await subscription.unsubscribe()
        if subscriptions:
            logfire.info("Notification relay closed", user_id=str(self.user_id))

    async def on_match_created(self, event: MatchInserted) -> Optional[Notification]:
        """Notify the target of a new like or super-like.

        Returns:
            The new notification, or None if the event was ignored
        """
        match = event.match
        if match.target_id != self.user_id:
            return None
        if match.reopened_from is not None:
            # Undo reopened a proposal the target already saw
            return None

        name = await self.profile_directory.get_display_name(match.initiator_id)
        if not name:
            logfire.warn(
                "Dropping match notification for unknown user",
                match_id=str(match.id),
                initiator_id=str(match.initiator_id),
            )
            return None

        if match.is_super_like:
            kind = NotificationKind.SUPER_LIKE
            content = f"{name} Super Liked you!"
        else:
            kind = NotificationKind.MATCH
            content = f"{name} liked you!"

        return self._push(
            Notification(
                id=NotificationId(f"match-{match.id}"),
                kind=kind,
                content=content,
                related_user_id=match.initiator_id,
                action_url="/matches",
                created_at=self.clock.now(),
            )
        )

    async def on_message_created(
        self, event: MessageInserted
    ) -> Optional[Notification]:
        """Notify the session user of a message from the other participant.

        Returns:
            The new notification, or None if the event was ignored
        """
        message = event.message
        if message.sender_id == self.user_id:
            return None

        participants = await self.profile_directory.get_match_participants(
            message.match_id
        )
        if not participants or self.user_id not in participants:
            return None

        name = await self.profile_directory.get_display_name(message.sender_id)
        if not name:
            logfire.warn(
                "Dropping message notification for unknown sender",
                message_id=str(message.id),
                sender_id=str(message.sender_id),
            )
            return None

        return self._push(
            Notification(
                id=NotificationId(f"message-{message.id}"),
                kind=NotificationKind.MESSAGE,
                content=f"New message from {name}",
                related_user_id=message.sender_id,
                action_url=f"/messages/{message.match_id}",
                created_at=self.clock.now(),
            )
        )

    def mark_read(self, notification_id: NotificationId) -> None:
        """Mark one notification read. Unknown or already-read ids are ignored."""
        for i, notification in enumerate(self._notifications):
            if notification.id != notification_id:
                continue
            if notification.is_read:
                return
            self._notifications[i] = notification.model_copy(update={"is_read": True})
            self._unread_count = max(0, self._unread_count - 1)
            return

    def mark_all_read(self) -> None:
        """Mark every notification read."""
        self._notifications = [
            n if n.is_read else n.model_copy(update={"is_read": True})
            for n in self._notifications
        ]
        self._unread_count = 0

    async def _dispatch(self, event: ChangeEvent) -> None:
        if isinstance(event, MatchInserted):
            await self.on_match_created(event)
        elif isinstance(event, MessageInserted):
            await self.on_message_created(event)

    def _push(self, notification: Notification) -> Optional[Notification]:
        # Redelivered events carry the same row id
        if any(n.id == notification.id for n in self._notifications):
            logfire.info("Duplicate notification ignored", id=notification.id)
            return None
        self._notifications.insert(0, notification)
        self._unread_count += 1
        if (
            self.max_notifications is not None
            and len(self._notifications) > self.max_notifications
        ):
            dropped = self._notifications[self.max_notifications :]
            del self._notifications[self.max_notifications :]
            self._unread_count -= sum(1 for n in dropped if not n.is_read)
        logfire.info(
            "Notification added",
            user_id=str(self.user_id),
            id=notification.id,
            kind=notification.kind.value,
        )
        return notification
