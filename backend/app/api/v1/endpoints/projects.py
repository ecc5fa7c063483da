import logging
from typing import List, Optional

from fastapi import Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers.projects import (
    clean_project_name,
    ensure_project_name_free,
    get_owned_project,
)
from app.api.v1.helpers.responses import RESP_AUTH, RESP_AUTH_400_404_409, RESP_AUTH_400_409, RESP_AUTH_404
from app.core import utc_now
from app.core.constants import LIST_PAGE_MAX
from app.core.errors import DuplicateName, ProjectNotFound
from app.core.permissions import Actions, require_authorized
from app.db.mongodb import get_database
from app.models.project import Project
from app.models.user import User
from app.repositories import ProjectRepository, TeamRepository
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.services import cascade, relationships

logger = logging.getLogger(__name__)

router = CustomAPIRouter()


@router.post(
    "/",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_409},
)
async def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create a project, optionally shared with some of the caller's teams.

    Requires the 'manage_projects' permission on the first requested team.
    Requested teams that do not exist or belong to someone else are ignored.
    """
    owner_id = str(current_user.id)
    name = clean_project_name(project_in.name)

    if project_in.team_ids:
        await require_authorized(current_user, Actions.MANAGE_PROJECTS, project_in.team_ids[0], db)

    team_ids = await relationships.resolve_project_teams(project_in.team_ids, owner_id, db)
    await ensure_project_name_free(name, owner_id, db)

    project = Project(name=name, icon=project_in.icon, owner_id=owner_id, team_ids=team_ids)
    try:
        await ProjectRepository(db).create(project)
    except DuplicateKeyError:
        raise DuplicateName("Project name already exists")

    logger.info(f"Project {project.id} created by {owner_id}")
    return project.model_dump(by_alias=True)


@router.get("/", response_model=List[ProjectResponse], responses={**RESP_AUTH})
async def read_projects(
    team_id: Optional[str] = None,
    skip: int = Query(0, ge=0, description="Number of projects to skip"),
    limit: int = Query(LIST_PAGE_MAX, ge=1, le=LIST_PAGE_MAX, description="Page size"),
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    List projects the caller owns or that are shared with a team the caller
    owns or belongs to. Optionally narrowed to one team.

    Paged with skip and limit; a page holds at most LIST_PAGE_MAX projects.
    """
    user_id = str(current_user.id)
    team_ids = await TeamRepository(db).find_accessible_ids(user_id)
    projects = await ProjectRepository(db).find_visible(
        user_id, team_ids, team_id=team_id, skip=skip, limit=limit
    )
    return [p.model_dump(by_alias=True) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse, responses={**RESP_AUTH_404})
async def read_project(
    project_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    project = await get_owned_project(project_id, str(current_user.id), db)
    return project.model_dump(by_alias=True)


@router.put("/{project_id}", response_model=ProjectResponse, responses={**RESP_AUTH_400_404_409})
async def update_project(
    project_id: str,
    project_in: ProjectUpdate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Update name, icon or teams of a project. Owner only.

    Replacing the teams unassigns the team of any task in this project whose
    team is no longer part of the project.
    """
    owner_id = str(current_user.id)
    project = await get_owned_project(project_id, owner_id, db)
    changes = project_in.model_dump(exclude_unset=True)

    update_data = {}
    if "name" in changes:
        name = clean_project_name(changes["name"])
        await ensure_project_name_free(name, owner_id, db, exclude_id=project.id)
        update_data["name"] = name
    if changes.get("icon") is not None:
        update_data["icon"] = changes["icon"]

    new_team_ids = None
    if "team_ids" in changes:
        new_team_ids = await relationships.resolve_project_teams(changes["team_ids"], owner_id, db)
        update_data["team_ids"] = new_team_ids

    update_data["updated_at"] = utc_now()
    try:
        updated = await ProjectRepository(db).update(project.id, update_data)
    except DuplicateKeyError:
        raise DuplicateName("Project name already exists")
    if updated is None:
        raise ProjectNotFound()

    if new_team_ids is not None:
        result = await cascade.on_project_teams_changed(updated, new_team_ids, owner_id, db)
        if not result.complete:
            logger.warning(f"Project {project.id} teams changed, cascade incomplete: {result.failed}")

    return updated.model_dump(by_alias=True)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT, responses={**RESP_AUTH_404})
async def delete_project(
    project_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Delete a project. Owner only. Its tasks are kept and unassigned from it.
    """
    owner_id = str(current_user.id)
    project = await get_owned_project(project_id, owner_id, db)

    await ProjectRepository(db).delete(project.id)
    logger.info(f"Project {project.id} deleted by {owner_id}")

    result = await cascade.on_project_deleted(project, owner_id, db)
    if not result.complete:
        logger.warning(f"Project {project.id} deleted, cascade incomplete: {result.failed}")
    return None
