"""Script to initialize the database."""

import argparse
import asyncio

from app.config import get_settings
from app.database import create_engine_for
from app.storage.database import DatabaseStorage
from app.storage.seed import seed_demo_data


async def init_db(seed: bool) -> None:
    """Create all tables and optionally load the demo dataset."""
    settings = get_settings()
    if not settings.database_url:
        raise SystemExit("DATABASE_URL is not set")

    storage = DatabaseStorage(create_engine_for(settings.database_url, echo=settings.debug))
    try:
        await storage.initialize()
        print("✓ Database initialized successfully!")

        if seed:
            if await seed_demo_data(storage):
                print("✓ Demo data loaded")
            else:
                print("• Demo data already present")
    finally:
        await storage.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the database schema")
    parser.add_argument("--seed", action="store_true", help="load the demo user and physicians")
    args = parser.parse_args()
    asyncio.run(init_db(args.seed))
