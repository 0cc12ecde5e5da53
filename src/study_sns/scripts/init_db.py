"""Create (and optionally reset) the configured database tables."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from study_sns.core.logging import configure_logging
from study_sns.core.settings import settings
from study_sns.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the Study SNS database tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    args = parser.parse_args(argv)

    configure_logging()
    try:
        if args.drop_tables:
            drop_tables()
            logger.info("Dropped all tables")
        create_tables()
    except SQLAlchemyError as exc:
        logger.error("Database initialisation failed: %s", exc)
        return 1

    logger.info("Tables ready for %s", settings.app_name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
