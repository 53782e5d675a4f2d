#!/usr/bin/env python3
"""
Database initialization script.

This script handles database setup including:
- Checking connectivity
- Creating all tables from the SQLAlchemy models
- Seeding subscription plan reference data

This follows the best practice of being idempotent - safe to run multiple times
(tables are created only when missing, plans are upserted by name).

Usage:
    python -m src.core.init_db
"""

import asyncio
import sys

from src.core.container import get_database, get_logger
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.seeds import seed_subscription_plans


async def init_db(database: Database) -> int:
    """Create tables and seed plans.

    Args:
        database: Database to initialize.

    Returns:
        int: Number of plans seeded.

    Raises:
        RuntimeError: If the database is unreachable.
    """
    logger = get_logger()

    if not await database.check_connection():
        raise RuntimeError("Database connection failed")

    await database.create_all()
    logger.info("database_tables_ready")

    async with database.get_session() as session:
        seeded = await seed_subscription_plans(session)
    logger.info("subscription_plans_seeded", count=seeded)
    return seeded


async def main() -> None:
    """Initialize the configured database and release its pool."""
    database = get_database()
    try:
        await init_db(database)
    finally:
        await database.close()


def run_init() -> None:
    """Synchronous wrapper for async init_db.

    This allows the script to be run directly or imported and called.
    """
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        get_logger().warning("database_init_interrupted")
        sys.exit(1)
    except Exception as e:
        get_logger().error("database_init_failed", error=e)
        sys.exit(1)


if __name__ == "__main__":
    run_init()
