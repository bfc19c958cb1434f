# src/hobbylink/scripts/init_db.py
"""Create (or recreate) every table on the configured database."""
from __future__ import annotations

import argparse
import logging

from hobbylink.core.logging import setup_logging
from hobbylink.core.settings import settings
from hobbylink.db.session import create_tables, drop_tables

logger = logging.getLogger("hobbylink.scripts.init_db")


def init_db(*, drop: bool = False) -> None:
    """Create all tables, optionally dropping the existing ones first."""
    if drop:
        drop_tables()
        logger.info("Dropped existing tables")
    create_tables()
    logger.info("Database initialized at %s", settings.effective_database_url)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the HobbyLink tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables before creating them again.",
    )
    args = parser.parse_args()

    setup_logging(settings.log_level)
    init_db(drop=args.drop)


if __name__ == "__main__":
    main()
