"""Logfire setup for the API process and the scripts.

Services log through logfire directly, with one span per domain operation:

    with logfire.span("match_service.accept_match", match_id=str(match_id)):
        ...
        logfire.info("Match accepted", match_id=str(match_id))
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from pal.config import Settings

# Chat text and meetup notes are user content; keep them out of telemetry
SCRUB_PATTERNS = ["content", "about_me", "auth_token", "message"]


def _should_send(settings: Settings) -> bool:
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process.

    Telemetry is sent to the cloud when OBSERVABILITY__SEND_TO_LOGFIRE says so,
    or otherwise when OBSERVABILITY__LOGFIRE_TOKEN is set. Without either,
    events are only printed to the console.
    """
    send = _should_send(settings)
    logfire.configure(
        service_name="pal-api",
        service_version="0.1.0",
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request. Headers are not captured since they carry tokens."""

    def _request_attributes(request, attributes):
        # WebSocket scopes have no method
        return {
            **attributes,
            "method": getattr(request, "method", None),
            "path": request.url.path,
        }

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented", url=engine.url.render_as_string())
