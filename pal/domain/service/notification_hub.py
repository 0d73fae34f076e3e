"""Registry of notification relays, one per signed-in user."""

import asyncio
from datetime import datetime, timedelta
from typing import Optional

import logfire

from pal.domain.model import SessionContext
from pal.domain.repository import ChangeFeed, ProfileDirectory
from pal.domain.value import UserId
from pal.util.clock import Clock

from .notification_relay import NotificationRelay


class NotificationHub:
    """Keeps one running NotificationRelay per user for the API process.

    A relay nobody has opened or read for ``idle_timeout`` counts as an ended
    session: it is closed and dropped the next time the hub is used.
    """

    def __init__(
        self,
        change_feed: ChangeFeed,
        profile_directory: ProfileDirectory,
        clock: Clock,
        idle_timeout: timedelta = timedelta(minutes=30),
        max_notifications: Optional[int] = None,
    ) -> None:
        self.change_feed = change_feed
        self.profile_directory = profile_directory
        self.clock = clock
        self.idle_timeout = idle_timeout
        self.max_notifications = max_notifications
        self._relays: dict[UserId, NotificationRelay] = {}
        self._last_seen: dict[UserId, datetime] = {}
        self._lock = asyncio.Lock()

    async def open(self, session: SessionContext) -> NotificationRelay:
        """Return the user's running relay, starting one if needed."""
        await self.evict_idle()
        async with self._lock:
            relay = self._relays.get(session.user_id)
            if relay is None:
                relay = NotificationRelay(
                    session=session,
                    change_feed=self.change_feed,
                    profile_directory=self.profile_directory,
                    clock=self.clock,
                    max_notifications=self.max_notifications,
                )
                self._relays[session.user_id] = relay
            if not relay.active:
                try:
                    await relay.start()
                except Exception:
                    self._relays.pop(session.user_id, None)
                    raise
            self._touch(session.user_id)
            return relay

    async def get(self, user_id: UserId) -> Optional[NotificationRelay]:
        """Return the user's relay if it is still live, and keep it alive."""
        await self.evict_idle()
        relay = self._relays.get(user_id)
        if relay is not None:
            self._touch(user_id)
        return relay

    async def close(self, user_id: UserId) -> bool:
        """Stop and forget the user's relay. Returns False if there was none."""
        async with self._lock:
            relay = self._relays.pop(user_id, None)
            self._last_seen.pop(user_id, None)
        if relay is None:
            return False
        await relay.close()
        return True

    async def evict_idle(self) -> int:
        """Close relays idle for longer than ``idle_timeout``.

        Returns:
            Number of relays closed
        """
        cutoff = self.clock.now() - self.idle_timeout
        async with self._lock:
            stale = [
                user_id
                for user_id, seen in self._last_seen.items()
                if seen < cutoff
            ]
            relays = []
            for user_id in stale:
                self._last_seen.pop(user_id)
                relay = self._relays.pop(user_id, None)
                if relay is not None:
                    relays.append(relay)
        for relay in relays:
            await relay.close()
        if relays:
            logfire.info("Idle notification relays evicted", relays=len(relays))
        return len(relays)

    async def close_all(self) -> None:
        async with self._lock:
            relays, self._relays = list(self._relays.values()), {}
            self._last_seen = {}
        for relay in relays:
            await relay.close()
        logfire.info("Notification hub closed", relays=len(relays))

    @property
    def relay_count(self) -> int:
        return len(self._relays)

    def _touch(self, user_id: UserId) -> None:
        self._last_seen[user_id] = self.clock.now()
