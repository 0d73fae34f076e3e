"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from pal.config import (
    AuthSettings,
    DatabaseSettings,
    MatchingSettings,
    QuotaSettings,
    RealtimeSettings,
    Settings,
)
from pal.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide
    def provide_realtime_settings(self, settings: Settings) -> RealtimeSettings:
        return settings.realtime

    @provide
    def provide_quota_settings(self, settings: Settings) -> QuotaSettings:
        return settings.quota

    @provide
    def provide_matching_settings(self, settings: Settings) -> MatchingSettings:
        return settings.matching
