"""CLI tool to create catalog tables and load the demo frames.

Usage:
    python -m app.cli.seed_catalog --create-tables
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from app.core.logging import get_logger, setup_logging
from app.infrastructure.database.seed import seed_frames
from app.infrastructure.database.session import engine, get_db_session, init_db
from app.infrastructure.database.unit_of_work import UnitOfWork

logger = get_logger(__name__)


async def run(create_tables: bool) -> int:
    """Seed the catalog and return the number of frames created."""
    if create_tables:
        await init_db()

    async with get_db_session() as session:
        uow = UnitOfWork(session)
        async with uow.transaction():
            frames = await seed_frames(uow)

    for frame in frames:
        print(f"{frame.id}  {frame.brand:<15} {frame.name:<18} {frame.style:<10} {frame.size}")

    await engine.dispose()
    return len(frames)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load demo eyewear frames into the catalog.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    args = parser.parse_args(argv)

    setup_logging()
    try:
        count = asyncio.run(run(args.create_tables))
    except Exception as e:
        logger.error("Seeding failed", error=str(e), exc_info=True)
        return 1

    logger.info("Seeding complete", frames=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
