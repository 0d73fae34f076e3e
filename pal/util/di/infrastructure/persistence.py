"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pal.config import Settings
from pal.domain.repository import (
    CoupleLinkRepository,
    MatchRepository,
    MeetupInviteRepository,
    MessageRepository,
    ProfileDirectory,
    SwipeActionRepository,
    UserRepository,
)
from pal.persistence.database import create_engine, create_session_factory
from pal.persistence.repository import (
    PostgresCoupleLinkRepository,
    PostgresMatchRepository,
    PostgresMeetupInviteRepository,
    PostgresMessageRepository,
    PostgresProfileDirectory,
    PostgresSwipeActionRepository,
    PostgresUserRepository,
)
from pal.util.di.base import ProviderBase
from pal.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed on shutdown."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request: commit on success, roll back on error."""
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Request transaction rolled back", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.APP)
    def get_profile_directory(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ProfileDirectory:
        """Provide profile directory (own short sessions per lookup)."""
        return PostgresProfileDirectory(session_factory)

    # Request-scoped repositories share the request session
    users = provide(
        PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST
    )
    matches = provide(
        PostgresMatchRepository, provides=MatchRepository, scope=Scope.REQUEST
    )
    messages = provide(
        PostgresMessageRepository, provides=MessageRepository, scope=Scope.REQUEST
    )
    meetup_invites = provide(
        PostgresMeetupInviteRepository,
        provides=MeetupInviteRepository,
        scope=Scope.REQUEST,
    )
    swipe_actions = provide(
        PostgresSwipeActionRepository,
        provides=SwipeActionRepository,
        scope=Scope.REQUEST,
    )
    couple_links = provide(
        PostgresCoupleLinkRepository,
        provides=CoupleLinkRepository,
        scope=Scope.REQUEST,
    )
