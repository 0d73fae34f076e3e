"""Standard library logging for third-party libraries.

uvicorn, asyncpg and alembic log through ``logging``. Their records are
forwarded to logfire so they sit next to the application's own events.
"""

import logging

import logfire

from pal.config import Settings

NOISY_LOGGERS = ("asyncpg", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route stdlib log records into logfire.

    Args:
        settings: Application settings; ``debug`` lowers the level to DEBUG
    """
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(level=level, handlers=[logfire.LogfireLoggingHandler()], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )
