"""Async engine and sessions for PostgreSQL.

Driver-level failures (lost connections, pool exhaustion, timeouts) surface to
the domain as UpstreamUnavailableError so reads can degrade instead of failing.
"""

import asyncio
import functools
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pal.adapter.error import UpstreamUnavailableError
from pal.config import Settings

T = TypeVar("T")

UPSTREAM_ERRORS = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    ConnectionError,
)


def create_engine(settings: Settings) -> AsyncEngine:
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={"command_timeout": database.command_timeout},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def read_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Short-lived session for lookups made outside a request scope."""
    async with session_factory() as session:
        yield session


def translate_upstream_errors(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Raise UpstreamUnavailableError for connection failures and timeouts.

    Constraint violations (IntegrityError) pass through unchanged.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except UPSTREAM_ERRORS as e:
            raise UpstreamUnavailableError(f"{func.__qualname__}: {e}") from e

    return wrapper
