import logging
from typing import List, Optional

from fastapi import Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers.responses import RESP_AUTH, RESP_AUTH_400_404, RESP_AUTH_404
from app.api.v1.helpers.tasks import build_task_filters, get_owned_task
from app.core import utc_now
from app.core.constants import LIST_PAGE_MAX
from app.core.errors import TaskNotFound
from app.core.permissions import Actions, require_authorized
from app.db.mongodb import get_database
from app.models.task import Task, TaskPriority, TaskStatus
from app.models.user import User
from app.repositories import TaskRepository
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.services import relationships

logger = logging.getLogger(__name__)

router = CustomAPIRouter()

# Fields that may be cleared by sending null; the rest ignore null.
_NULLABLE_FIELDS = {"description", "due_date", "assigned_to"}
_PLAIN_FIELDS = ["title", "description", "status", "priority", "due_date", "scheduled", "assigned_to"]


@router.post(
    "/",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_404},
)
async def create_task(
    task_in: TaskCreate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create a task.

    A team, if given, requires the 'create_tasks' permission on it. When only a
    project is given and it is shared with exactly one team, the task joins
    that team.
    """
    owner_id = str(current_user.id)

    if task_in.team_id is not None:
        await require_authorized(current_user, Actions.CREATE_TASKS, task_in.team_id, db)

    links = await relationships.resolve_task_links(
        task_in.team_id, task_in.project_id, owner_id, db
    )

    task = Task(
        **task_in.model_dump(exclude={"team_id", "project_id"}),
        team_id=links.team_id,
        project_id=links.project_id,
        owner_id=owner_id,
    )
    await TaskRepository(db).create(task)

    logger.info(f"Task {task.id} created by {owner_id}")
    return task.model_dump(by_alias=True)


@router.get("/", response_model=List[TaskResponse], responses={**RESP_AUTH})
async def read_tasks(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    team_id: Optional[str] = None,
    project_id: Optional[str] = None,
    skip: int = Query(0, ge=0, description="Number of tasks to skip"),
    limit: int = Query(LIST_PAGE_MAX, ge=1, le=LIST_PAGE_MAX, description="Page size"),
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    List the caller's tasks, newest first.

    Paged with skip and limit; a page holds at most LIST_PAGE_MAX tasks.
    """
    filters = build_task_filters(status, priority, team_id, project_id)
    tasks = await TaskRepository(db).find_owned(
        str(current_user.id), filters, skip=skip, limit=limit
    )
    return [t.model_dump(by_alias=True) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse, responses={**RESP_AUTH_404})
async def read_task(
    task_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    task = await get_owned_task(task_id, str(current_user.id), db)
    return task.model_dump(by_alias=True)


@router.put("/{task_id}", response_model=TaskResponse, responses={**RESP_AUTH_400_404})
async def update_task(
    task_id: str,
    task_in: TaskUpdate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Partially update a task.

    Changing only the project is validated against the task's current team,
    and changing only the team against its current project.
    """
    task = await get_owned_task(task_id, str(current_user.id), db)
    changes = task_in.model_dump(exclude_unset=True)

    new_team_id = changes.get("team_id")
    if new_team_id is not None and new_team_id != task.team_id:
        await require_authorized(current_user, Actions.CREATE_TASKS, new_team_id, db)

    update_data = {}
    for field in _PLAIN_FIELDS:
        if field not in changes:
            continue
        if changes[field] is None and field not in _NULLABLE_FIELDS:
            continue
        update_data[field] = changes[field]

    if "team_id" in changes or "project_id" in changes:
        links = await relationships.resolve_task_update_links(task, changes, db)
        update_data["team_id"] = links.team_id
        update_data["project_id"] = links.project_id

    update_data["updated_at"] = utc_now()
    updated = await TaskRepository(db).update(task.id, update_data)
    if updated is None:
        raise TaskNotFound()
    return updated.model_dump(by_alias=True)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, responses={**RESP_AUTH_404})
async def delete_task(
    task_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    task = await get_owned_task(task_id, str(current_user.id), db)
    await TaskRepository(db).delete(task.id)
    logger.info(f"Task {task.id} deleted by {current_user.id}")
    return None
