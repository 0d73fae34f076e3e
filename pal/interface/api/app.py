"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pal.config import Settings
from pal.interface.api.routes import (
    couples,
    health,
    matches,
    meetups,
    messages,
    notifications,
    users,
)
from pal.interface.error import register_error_handlers
from pal.util.di.container import create_container, setup_di
from pal.util.logging import setup_logging
from pal.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Closes notification relays, the change feed and the engine
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to use instead of the production one

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    setup_logging(settings)

    app_instance = FastAPI(
        title="Pal API",
        description="Backend API for Pal - find friends, match, chat and plan meetups",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(matches.router)
    app_instance.include_router(meetups.router)
    app_instance.include_router(messages.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(couples.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
