"""
Team Helper Functions

Shared helper functions for team-related operations.
"""

from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.team import Team
from app.repositories import UserRepository


async def enrich_team_with_users(team: Team, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Serialize a team and add each member's name and email.

    Args:
        team: The team to serialize
        db: Database instance

    Returns:
        Team data with name/email added to each member. Members whose user
        record no longer exists keep name/email as None.
    """
    team_data = team.model_dump(by_alias=True)
    members = team_data.get("members", [])
    user_ids = [m["user_id"] for m in members]

    users = await UserRepository(db).find_by_ids(user_ids)
    user_map = {u["_id"]: u for u in users}

    for member in members:
        user = user_map.get(member["user_id"], {})
        member["name"] = user.get("name")
        member["email"] = user.get("email")

    return team_data
