"""Realtime (change feed) infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from pal.adapter.realtime import PostgresChangeFeed
from pal.config import DatabaseSettings, RealtimeSettings
from pal.domain.repository import ChangeFeed
from pal.util.di.base import ProviderBase


class RealtimeProvider(ProviderBase):
    """Realtime component base."""

    __mock_component__ = "realtime"


class ProdRealtimeProvider(RealtimeProvider):
    """Change feed over Postgres LISTEN/NOTIFY."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_change_feed(
        self,
        database_settings: DatabaseSettings,
        realtime_settings: RealtimeSettings,
    ) -> AsyncIterator[ChangeFeed]:
        feed = PostgresChangeFeed(database_settings, realtime_settings)
        yield feed
        await feed.close()
