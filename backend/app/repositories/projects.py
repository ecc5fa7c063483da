"""
Project Repository

Centralizes all database operations for projects.
"""

from typing import Any, Dict, List, Optional

from app.models.project import Project
from app.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for project database operations."""

    collection_name = "projects"
    model_class = Project

    async def find_visible(
        self,
        user_id: str,
        team_ids: List[str],
        team_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> List[Project]:
        """
        Projects owned by the user or shared with any of team_ids.

        If team_id is given, only visible projects shared with that team.
        """
        query: Dict[str, Any] = {
            "$or": [{"owner_id": user_id}, {"team_ids": {"$in": team_ids}}]
        }
        if team_id:
            query["team_ids"] = team_id
        return await self.find_many(query, skip=skip, limit=limit, sort_by="name")

    async def name_taken(
        self, owner_id: str, name: str, exclude_id: Optional[str] = None
    ) -> bool:
        """Check whether owner_id already has a project called name."""
        query: Dict[str, Any] = {"owner_id": owner_id, "name": name}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        return await self.exists(query)

    async def pull_team(self, owner_id: str, team_id: str) -> int:
        """Remove team_id from team_ids of every project owned by owner_id."""
        return await self.update_many_raw(
            {"owner_id": owner_id, "team_ids": team_id},
            {"$pull": {"team_ids": team_id}},
        )
