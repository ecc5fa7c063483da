import logging

import pymongo

from app.db.mongodb import get_database

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates indexes for all collections, including the per-owner uniqueness constraints."""
    logger.info("Creating database indexes...")

    # Users
    await db["users"].create_index("email", unique=True)

    # Teams: names are unique per owner
    await db["teams"].create_index(
        [("owner_id", pymongo.ASCENDING), ("name", pymongo.ASCENDING)], unique=True
    )
    await db["teams"].create_index("members.user_id")

    # Projects: names are unique per owner
    await db["projects"].create_index(
        [("owner_id", pymongo.ASCENDING), ("name", pymongo.ASCENDING)], unique=True
    )
    await db["projects"].create_index("team_ids")

    # Tasks: cascades filter on owner plus one of the links
    await db["tasks"].create_index(
        [
            ("owner_id", pymongo.ASCENDING),
            ("team_id", pymongo.ASCENDING),
            ("project_id", pymongo.ASCENDING),
        ]
    )
    await db["tasks"].create_index(
        [("owner_id", pymongo.ASCENDING), ("project_id", pymongo.ASCENDING)]
    )
    await db["tasks"].create_index([("created_at", pymongo.DESCENDING)])

    logger.info("Database indexes created")


async def init_db():
    db = await get_database()
    await create_indexes(db)
