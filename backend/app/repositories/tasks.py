"""
Task Repository

Centralizes all database operations for tasks.
"""

from typing import Any, Dict, List

from app.models.task import Task
from app.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for task database operations."""

    collection_name = "tasks"
    model_class = Task

    async def find_owned(
        self,
        owner_id: str,
        filters: Dict[str, Any],
        skip: int = 0,
        limit: int = 1000,
    ) -> List[Task]:
        """Tasks owned by a user, newest first."""
        query = {"owner_id": owner_id, **filters}
        return await self.find_many(query, skip=skip, limit=limit, sort_by="created_at", sort_order=-1)

    async def detach_team(self, owner_id: str, team_id: str) -> int:
        """Null out team_id on the owner's tasks that reference team_id."""
        return await self.update_many(
            {"owner_id": owner_id, "team_id": team_id}, {"team_id": None}
        )

    async def detach_project(self, owner_id: str, project_id: str) -> int:
        """Null out project_id on the owner's tasks that reference project_id."""
        return await self.update_many(
            {"owner_id": owner_id, "project_id": project_id}, {"project_id": None}
        )

    async def detach_teams_outside(
        self, owner_id: str, project_id: str, allowed_team_ids: List[str]
    ) -> int:
        """Null out team_id on the project's tasks whose team is not in allowed_team_ids."""
        return await self.update_many(
            {
                "owner_id": owner_id,
                "project_id": project_id,
                "team_id": {"$nin": allowed_team_ids, "$ne": None},
            },
            {"team_id": None},
        )
