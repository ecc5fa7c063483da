"""
Team Repository

Centralizes all database operations for teams.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from app.models.team import Team
from app.repositories.base import BaseRepository

_MEMBERS_USER_ID = "members.user_id"


class TeamRepository(BaseRepository[Team]):
    """Repository for team database operations."""

    collection_name = "teams"
    model_class = Team

    async def find_owned(self, owner_id: str, limit: int = 1000) -> List[Team]:
        """Teams owned by a user, sorted by name."""
        return await self.find_many(
            {"owner_id": owner_id}, limit=limit, sort_by="name"
        )

    async def find_owned_ids(self, team_ids: List[str], owner_id: str) -> List[str]:
        """Return the subset of team_ids that name teams owned by owner_id."""
        if not team_ids:
            return []
        cursor = self.collection.find(
            {"_id": {"$in": team_ids}, "owner_id": owner_id}, {"_id": 1}
        )
        docs = await cursor.to_list(None)
        return [doc["_id"] for doc in docs]

    async def find_accessible_ids(self, user_id: str) -> List[str]:
        """IDs of teams the user owns or is a member of."""
        cursor = self.collection.find(
            {"$or": [{"owner_id": user_id}, {_MEMBERS_USER_ID: user_id}]},
            {"_id": 1},
        )
        docs = await cursor.to_list(None)
        return [doc["_id"] for doc in docs]

    async def name_taken(
        self, owner_id: str, name: str, exclude_id: Optional[str] = None
    ) -> bool:
        """Check whether owner_id already has a team called name."""
        query: Dict[str, Any] = {"owner_id": owner_id, "name": name}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        return await self.exists(query)

    async def add_member(
        self, team_id: str, member_data: Dict[str, Any], updated_at: datetime
    ) -> bool:
        """
        Append a member entry to a team.

        The push only applies while the user is neither the owner nor already
        listed, so two concurrent adds of the same user store one entry.
        Returns False when nothing matched.
        """
        user_id = member_data["user_id"]
        result = await self.collection.update_one(
            {
                "_id": team_id,
                "owner_id": {"$ne": user_id},
                _MEMBERS_USER_ID: {"$ne": user_id},
            },
            {"$push": {"members": member_data}, "$set": {"updated_at": updated_at}},
        )
        return result.matched_count > 0

    async def remove_member(self, team_id: str, user_id: str, updated_at: datetime) -> None:
        """Remove a member entry from a team. Remaining order is kept."""
        await self.update_raw(
            team_id,
            {
                "$pull": {"members": {"user_id": user_id}},
                "$set": {"updated_at": updated_at},
            },
        )
