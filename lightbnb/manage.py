"""
Database management commands for local development.

    python -m lightbnb.manage check
    python -m lightbnb.manage create-tables
    python -m lightbnb.manage reset --confirm
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from lightbnb import database
from lightbnb.config import settings, configure_logging

logger = logging.getLogger(__name__)


async def check_connection() -> bool:
    try:
        return await database.test_database_connection()
    finally:
        await database.close_db_connection()


async def create_schema() -> None:
    try:
        await database.create_tables()
    finally:
        await database.close_db_connection()


async def reset_schema() -> None:
    """Drop and recreate every table."""
    logger.warning("Resetting database - all data will be lost!")
    try:
        await database.drop_tables()
        await database.create_tables()
    finally:
        await database.close_db_connection()
    logger.info("Database reset completed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.app_name} database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("check", help="Check database connectivity")
    subparsers.add_parser("create-tables", help="Create any missing tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run a management command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 2

    try:
        if args.command == "check":
            return 0 if asyncio.run(check_connection()) else 1

        elif args.command == "create-tables":
            asyncio.run(create_schema())

        elif args.command == "reset":
            if not args.confirm:
                logger.error("Database reset requires --confirm flag")
                return 2
            asyncio.run(reset_schema())

    except Exception as e:
        logger.error(f"Command {args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
