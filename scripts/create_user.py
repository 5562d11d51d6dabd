#!/usr/bin/env python3
"""
Provision a user account.

The API has no sign-up route; accounts are created here with a hashed
password in whichever store STORAGE_BACKEND selects. Only the database
backend persists beyond this process.
"""

import argparse
import asyncio
import getpass
import sys

from app.config import get_settings
from app.core.exceptions import ValidationException
from app.schemas.users import UserCreate
from app.services.user_service import UserService
from app.storage import build_storage


async def create_user(data: UserCreate) -> int:
    """Create the user and report the outcome; returns an exit code."""
    settings = get_settings()
    storage = build_storage(settings)
    if settings.storage_backend == "memory":
        print("⚠️  STORAGE_BACKEND=memory: the user will not outlive this script")

    try:
        await storage.initialize()
        user = await UserService(storage).create_user(data)
    except ValidationException as e:
        for error in e.errors:
            print(f"❌ {error['field']}: {error['message']}")
        return 1
    finally:
        await storage.close()

    print(f"✓ Created user {user.username} ({user.id})")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("username")
    parser.add_argument("--email")
    parser.add_argument("--first-name")
    parser.add_argument("--last-name")
    parser.add_argument("--password", help="prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    data = UserCreate(
        username=args.username,
        password=password,
        email=args.email,
        first_name=args.first_name,
        last_name=args.last_name,
    )
    sys.exit(asyncio.run(create_user(data)))


if __name__ == "__main__":
    main()
