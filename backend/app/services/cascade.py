"""
Cascade Manager

Removes dangling references after a Team or Project is deleted, or after a
project's teams are replaced. Dependent records are detached, never deleted.

Each step is an independent multi-document update. There is no transaction:
a step that fails is logged and skipped, earlier steps stay applied and the
triggering operation still counts as successful. All steps filter on the
reference they clear, so replaying a cascade is a no-op.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.metrics import cascade_failures_total, cascade_updates_total
from app.models.project import Project
from app.models.team import Team
from app.repositories import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    trigger: str
    modified: Dict[str, int] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


async def _run_steps(
    trigger: str,
    steps: List[tuple[str, Callable[[], Awaitable[int]]]],
) -> CascadeResult:
    result = CascadeResult(trigger=trigger)
    for name, step in steps:
        try:
            count = await step()
        except Exception as e:
            result.failed.append(name)
            cascade_failures_total.labels(trigger=trigger, step=name).inc()
            logger.error(f"Cascade step {trigger}/{name} failed, continuing: {e}")
            continue
        result.modified[name] = count
        cascade_updates_total.labels(trigger=trigger, step=name).inc(count)

    logger.info(f"Cascade {trigger} finished: modified={result.modified} failed={result.failed}")
    return result


async def on_team_deleted(
    team: Team, owner_id: str, db: AsyncIOMotorDatabase
) -> CascadeResult:
    """
    Detach a deleted team from the owner's projects and tasks.

    Member entries disappear with the team document itself.
    """
    project_repo = ProjectRepository(db)
    task_repo = TaskRepository(db)

    return await _run_steps(
        "team_deleted",
        [
            ("project_team_ids", lambda: project_repo.pull_team(owner_id, team.id)),
            ("task_team_id", lambda: task_repo.detach_team(owner_id, team.id)),
        ],
    )


async def on_project_deleted(
    project: Project, owner_id: str, db: AsyncIOMotorDatabase
) -> CascadeResult:
    """
    Detach a deleted project from the owner's tasks.

    team_id on those tasks is left alone; without a project it needs no
    compatibility check.
    """
    task_repo = TaskRepository(db)

    return await _run_steps(
        "project_deleted",
        [
            ("task_project_id", lambda: task_repo.detach_project(owner_id, project.id)),
        ],
    )


async def on_project_teams_changed(
    project: Project, team_ids: List[str], owner_id: str, db: AsyncIOMotorDatabase
) -> CascadeResult:
    """
    Keep the project's tasks consistent after its team set was replaced.

    Tasks of the project whose team is no longer in team_ids lose their team.
    An empty team_ids accepts any team, so nothing is detached then.
    """
    if not team_ids:
        return CascadeResult(trigger="project_teams_changed")

    task_repo = TaskRepository(db)

    return await _run_steps(
        "project_teams_changed",
        [
            (
                "task_team_id",
                lambda: task_repo.detach_teams_outside(owner_id, project.id, team_ids),
            ),
        ],
    )
