"""Seed the default categories for one user from the command line."""

import argparse
import asyncio
from typing import Optional, Sequence

from fastapi import HTTPException

from expense_tracker.core.logger import logger
from expense_tracker.storage.database import async_session, dispose_engine
from expense_tracker.v1_0.repositories import CategoryRepository
from expense_tracker.v1_0.services import CategoryService


async def seed(user_id: str) -> int:
    service = CategoryService(category_repository=CategoryRepository())
    try:
        async with async_session() as db:
            result = await service.seed_defaults(user_id, db)
    finally:
        await dispose_engine()
    return result.created


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="seed-categories",
        description="Create the default expense categories for a user",
    )
    parser.add_argument("user_id", help="Identity provider subject of the user")
    args = parser.parse_args(argv)

    try:
        created = asyncio.run(seed(args.user_id))
    except HTTPException as e:
        logger.error("[SeedCategories] failed: %s", e.detail)
        return 1
    logger.info("[SeedCategories] created %s categories for %s", created, args.user_id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
