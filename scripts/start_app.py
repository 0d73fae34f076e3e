#!/usr/bin/env python3
"""Serve the Pal API with uvicorn.

Logfire is configured before uvicorn imports the app so that failures while
building the DI container are reported too.
"""

import argparse
import sys

import logfire
import uvicorn

from pal.config import Settings
from pal.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    parser = argparse.ArgumentParser(description="Serve the Pal API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args(argv)

    configure_logfire(settings)

    with logfire.span("start_app", host=args.host, port=args.port):
        try:
            uvicorn.run(
                "pal.interface.api.app:app",
                host=args.host,
                port=args.port,
                reload=args.reload,
                log_level="debug" if settings.debug else "info",
            )
        except Exception:
            logfire.exception("Pal API failed to start", environment=settings.environment)
            raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
