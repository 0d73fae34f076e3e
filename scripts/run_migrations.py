#!/usr/bin/env python3
"""Apply or roll back database migrations.

    scripts/run_migrations.py             # upgrade to head
    scripts/run_migrations.py --revision 3c1f9a7d2b41
    scripts/run_migrations.py --downgrade base
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from pal.config import Settings
from pal.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run Pal database migrations")
    parser.add_argument("--revision", default="head", help="Upgrade target")
    parser.add_argument("--downgrade", metavar="REVISION", help="Downgrade target")
    parser.add_argument("--config", default="alembic.ini")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)
    alembic_cfg = Config(args.config)

    target = args.downgrade or args.revision
    direction = "downgrade" if args.downgrade else "upgrade"
    with logfire.span("run_migrations", direction=direction, target=target):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, args.downgrade)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception:
            logfire.exception("Database migration failed", direction=direction, target=target)
            raise
        logfire.info("Database migrations finished", direction=direction, target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
