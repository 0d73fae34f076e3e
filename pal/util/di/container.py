"""Production DI container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from pal.util.di import resolve_providers


def create_container() -> AsyncContainer:
    # FastapiProvider exposes the Request to the session provider
    return make_async_container(*resolve_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    setup_dishka(container, app)
