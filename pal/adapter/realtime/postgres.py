"""Postgres LISTEN/NOTIFY change feed.

A trigger on the published tables sends every row change as JSON on one
NOTIFY channel (see the initial migration). One dedicated asyncpg connection
listens on that channel while at least one subscription is active.
"""

import asyncio
import json
from typing import Any, Optional

import asyncpg
import logfire

from pal.adapter.error import PayloadTranslationError, UpstreamUnavailableError
from pal.adapter.realtime.translate import translate_payload
from pal.config import DatabaseSettings, RealtimeSettings
from pal.domain.repository import ChangeFeed, ChangeFilter, ChangeHandler, Subscription


class PostgresSubscription(Subscription):
    def __init__(
        self,
        feed: "PostgresChangeFeed",
        change_filter: ChangeFilter,
        handler: ChangeHandler,
    ) -> None:
        self.feed = feed
        self.change_filter = change_filter
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            await self.feed._remove(self)


class PostgresChangeFeed(ChangeFeed):
    """Change feed backed by ``LISTEN`` on a dedicated asyncpg connection."""

    def __init__(
        self,
        database_settings: DatabaseSettings,
        realtime_settings: RealtimeSettings,
    ) -> None:
        self.dsn = database_settings.listen_dsn
        self.channel = realtime_settings.channel
        self._connection: Optional[asyncpg.Connection] = None
        self._subscriptions: list[PostgresSubscription] = []
        self._tasks: set[asyncio.Task] = set()
        self._lock = asyncio.Lock()

    async def subscribe(
        self, change_filter: ChangeFilter, handler: ChangeHandler
    ) -> Subscription:
        async with self._lock:
            if self._connection is None:
                await self._connect()
            subscription = PostgresSubscription(self, change_filter, handler)
            self._subscriptions.append(subscription)
        logfire.info(
            "Change feed subscription added",
            table=change_filter.table.value,
            subscribers=len(self._subscriptions),
        )
        return subscription

    async def close(self) -> None:
        """Drop every subscription and the listening connection."""
        async with self._lock:
            for subscription in self._subscriptions:
                subscription._active = False
            self._subscriptions.clear()
            await self._disconnect()

    async def _remove(self, subscription: PostgresSubscription) -> None:
        async with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
            if not self._subscriptions:
                await self._disconnect()

    async def _connect(self) -> None:
        try:
            connection = await asyncpg.connect(self.dsn)
            await connection.add_listener(self.channel, self._on_notify)
        except (OSError, asyncpg.PostgresError, asyncio.TimeoutError) as e:
            logfire.error("Change feed connection failed", error=str(e))
            raise UpstreamUnavailableError(f"Cannot listen on {self.channel}: {e}") from e
        self._connection = connection
        logfire.info("Change feed listening", channel=self.channel)

    async def _disconnect(self) -> None:
        connection, self._connection = self._connection, None
        if connection is None:
            return
        try:
            await connection.remove_listener(self.channel, self._on_notify)
        finally:
            await connection.close()
        logfire.info("Change feed stopped listening", channel=self.channel)

    def _on_notify(
        self, connection: asyncpg.Connection, pid: int, channel: str, payload: str
    ) -> None:
        # asyncpg calls listeners synchronously; handlers run as tasks
        task = asyncio.ensure_future(self._deliver(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, raw: str) -> None:
        try:
            payload: dict[str, Any] = json.loads(raw)
        except json.JSONDecodeError as e:
            logfire.error("Undecodable change payload", error=str(e))
            return

        record = payload.get("record") or payload.get("old_record") or {}
        targets = [
            s
            for s in list(self._subscriptions)
            if s.change_filter.matches(payload.get("table"), payload.get("type"), record)
        ]
        if not targets:
            return

        try:
            event = translate_payload(payload)
        except PayloadTranslationError as e:
            logfire.error(
                "Change payload rejected",
                table=payload.get("table"),
                type=payload.get("type"),
                error=str(e),
            )
            return

        for subscription in targets:
            if not subscription.active:
                continue
            try:
                await subscription.handler(event)
            except Exception as e:
                logfire.exception(
                    "Change handler failed",
                    table=payload.get("table"),
                    error=str(e),
                )
