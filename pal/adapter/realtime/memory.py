"""In-process change feed.

Used by tests and local runs without Postgres. ``publish`` takes the same raw
payload shape the database trigger emits.
"""

from typing import Any

import logfire

from pal.adapter.realtime.translate import translate_payload
from pal.domain.repository import ChangeFeed, ChangeFilter, ChangeHandler, Subscription


class InMemorySubscription(Subscription):
    def __init__(
        self,
        feed: "InMemoryChangeFeed",
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
            self.feed._remove(self)


class InMemoryChangeFeed(ChangeFeed):
    """Change feed that delivers published payloads synchronously."""

    def __init__(self) -> None:
        self._subscriptions: list[InMemorySubscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def subscribe(
        self, change_filter: ChangeFilter, handler: ChangeHandler
    ) -> Subscription:
        subscription = InMemorySubscription(self, change_filter, handler)
        self._subscriptions.append(subscription)
        return subscription

    async def publish(self, payload: dict[str, Any]) -> int:
        """Deliver a raw change payload to every matching subscription.

        Returns:
            Number of handlers invoked

        Raises:
            PayloadTranslationError: If the payload cannot be translated
        """
        record = payload.get("record") or payload.get("old_record") or {}
        targets = [
            s
            for s in self._subscriptions
            if s.change_filter.matches(payload.get("table"), payload.get("type"), record)
        ]
        if not targets:
            return 0

        event = translate_payload(payload)
        for subscription in targets:
            if subscription.active:
                await subscription.handler(event)
        logfire.info(
            "Change delivered",
            table=payload.get("table"),
            type=payload.get("type"),
            subscribers=len(targets),
        )
        return len(targets)

    def _remove(self, subscription: InMemorySubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
