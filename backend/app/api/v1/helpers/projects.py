"""
Project Helper Functions

Shared helper functions for project-related operations.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.errors import DuplicateName, InvalidInput, ProjectNotFound
from app.models.project import Project
from app.repositories import ProjectRepository


def clean_project_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise InvalidInput("Project name is required")
    return name.strip()


async def get_owned_project(
    project_id: str, owner_id: str, db: AsyncIOMotorDatabase
) -> Project:
    """
    Fetch a project owned by owner_id.

    Raises:
        ProjectNotFound: if it does not exist or belongs to someone else
    """
    project = await ProjectRepository(db).get_owned(project_id, owner_id)
    if project is None:
        raise ProjectNotFound()
    return project


async def ensure_project_name_free(
    name: str,
    owner_id: str,
    db: AsyncIOMotorDatabase,
    exclude_id: Optional[str] = None,
) -> None:
    """
    Raises:
        DuplicateName: owner_id already has a project with this name
    """
    if await ProjectRepository(db).name_taken(owner_id, name, exclude_id=exclude_id):
        raise DuplicateName("Project name already exists")
