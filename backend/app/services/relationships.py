"""
Relationship Resolver

Validates and derives the Team/Project links of tasks and projects at write
time. Task resolution is strict (unknown or foreign ids are errors); project
team resolution is permissive (unknown or foreign ids are dropped).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.errors import IncompatibleAssignment, ProjectNotFound, TeamNotFound
from app.models.task import Task
from app.repositories import ProjectRepository, TeamRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskLinks:
    team_id: Optional[str]
    project_id: Optional[str]


async def resolve_task_links(
    team_id: Optional[str],
    project_id: Optional[str],
    owner_id: str,
    db: AsyncIOMotorDatabase,
) -> TaskLinks:
    """
    Resolve the team/project pair for a task owned by owner_id.

    Args:
        team_id: Requested team, or None
        project_id: Requested project, or None
        owner_id: Owner of the task; both links must belong to this user
        db: Database instance

    Returns:
        The links to store. When only a project is given and that project is
        shared with exactly one team, that team is filled in.

    Raises:
        TeamNotFound: team_id does not name a team owned by owner_id
        ProjectNotFound: project_id does not name a project owned by owner_id
        IncompatibleAssignment: the project has teams and team_id is not one of them
    """
    if team_id is not None:
        team = await TeamRepository(db).get_owned(team_id, owner_id)
        if team is None:
            raise TeamNotFound()

    if project_id is None:
        return TaskLinks(team_id=team_id, project_id=None)

    project = await ProjectRepository(db).get_owned(project_id, owner_id)
    if project is None:
        raise ProjectNotFound()

    project_teams = project.team_ids
    if team_id is not None:
        if project_teams and team_id not in project_teams:
            raise IncompatibleAssignment()
        return TaskLinks(team_id=team_id, project_id=project_id)

    if len(project_teams) == 1:
        logger.debug(f"Task team derived from project {project_id}: {project_teams[0]}")
        return TaskLinks(team_id=project_teams[0], project_id=project_id)

    return TaskLinks(team_id=None, project_id=project_id)


async def resolve_task_update_links(
    task: Task,
    changes: Dict[str, Any],
    db: AsyncIOMotorDatabase,
) -> TaskLinks:
    """
    Resolve links for an update of an existing task.

    Only keys present in changes are treated as changed. The other link keeps
    its current value and the merged pair goes through resolve_task_links, so
    changing only the project is checked against the task's current team and
    vice versa. An explicit None team is re-derived there when the project is
    shared with exactly one team.
    """
    team_id = changes["team_id"] if "team_id" in changes else task.team_id
    project_id = changes["project_id"] if "project_id" in changes else task.project_id
    return await resolve_task_links(team_id, project_id, task.owner_id, db)


async def resolve_project_teams(
    team_ids: Optional[List[str]],
    owner_id: str,
    db: AsyncIOMotorDatabase,
) -> List[str]:
    """
    Reduce a requested list of team ids to the distinct ones owned by owner_id.

    Unknown ids and teams of other users are silently dropped. The result is
    a set in list form; callers must not rely on its order.
    """
    if not team_ids:
        return []

    candidates = list(dict.fromkeys(t for t in team_ids if isinstance(t, str) and t))
    if not candidates:
        return []

    owned = set(await TeamRepository(db).find_owned_ids(candidates, owner_id))
    dropped = [t for t in candidates if t not in owned]
    if dropped:
        logger.debug(f"Dropped team ids not owned by {owner_id}: {dropped}")
    return [t for t in candidates if t in owned]
