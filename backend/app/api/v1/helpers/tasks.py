"""
Task Helper Functions

Shared helper functions for task-related operations.
"""

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.errors import TaskNotFound
from app.models.task import Task
from app.repositories import TaskRepository


async def get_owned_task(task_id: str, owner_id: str, db: AsyncIOMotorDatabase) -> Task:
    """
    Fetch a task owned by owner_id.

    Raises:
        TaskNotFound: if it does not exist or belongs to someone else
    """
    task = await TaskRepository(db).get_owned(task_id, owner_id)
    if task is None:
        raise TaskNotFound()
    return task


def build_task_filters(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    team_id: Optional[str] = None,
    project_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the MongoDB filter for task listing from optional query params."""
    filters: Dict[str, Any] = {}
    if status:
        filters["status"] = status
    if priority:
        filters["priority"] = priority
    if team_id:
        filters["team_id"] = team_id
    if project_id:
        filters["project_id"] = project_id
    return filters
