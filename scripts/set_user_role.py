#!/usr/bin/env python3
"""
Maintenance script: change a user's global role.

Global admins bypass every team-scoped permission check, so this is the way
to hand out (or take back) that privilege. The user has to sign in again for
clients that cached the role.

Usage:
    python scripts/set_user_role.py user@example.com admin
    python scripts/set_user_role.py user@example.com member
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import settings
from app.core.constants import GLOBAL_ROLES
from app.repositories import UserRepository

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def set_role(email: str, role: str) -> bool:
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    try:
        db = client[settings.DATABASE_NAME]
        user = await UserRepository(db).set_global_role(email, role)
    finally:
        client.close()

    if user is None:
        logger.error(f"✗ User not found: {email}")
        return False

    logger.info(f"✓ {user.name} <{user.email}> now has global role '{user.global_role}'")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Change a user's global role")
    parser.add_argument("email", help="Email of the user")
    parser.add_argument("role", choices=GLOBAL_ROLES, help="New global role")
    args = parser.parse_args()

    ok = asyncio.run(set_role(args.email, args.role))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
