"""
Team-scoped Authorization

Decides whether a user may perform an action against a team. The decision
itself (is_authorized) is a pure function of the user, the action and one
snapshot of the team record; authorize() performs that single read.

Rules, in order:
    1. Global admins are always allowed.
    2. Without a team, the action's policy decides (every shipped action denies).
    3. Unknown team or unknown action: deny.
    4. The team owner is allowed.
    5. A member is allowed if their team role is in the action's privileged set.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.constants import (
    GLOBAL_ROLE_ADMIN,
    PRIVILEGED_ROLE_ADMIN,
    PRIVILEGED_ROLE_PROJECT_MANAGER,
)
from app.core.errors import Unauthorized
from app.core.metrics import authorization_decisions_total
from app.models.team import Team
from app.models.user import User
from app.repositories import TeamRepository

logger = logging.getLogger(__name__)


class Actions:
    """Actions that are checked against a team."""

    CREATE_TASKS = "create_tasks"
    MANAGE_PROJECTS = "manage_projects"


@dataclass(frozen=True)
class ActionPolicy:
    privileged_roles: FrozenSet[str]
    allow_without_team: bool = False
    denied_message: str = "Not enough permissions in this team"


# "Admin" and "Project Manager" are not assignable membership roles
# (see TEAM_ROLES), so members never satisfy these sets today.
ACTION_POLICIES: Dict[str, ActionPolicy] = {
    Actions.CREATE_TASKS: ActionPolicy(
        privileged_roles=frozenset({PRIVILEGED_ROLE_ADMIN, PRIVILEGED_ROLE_PROJECT_MANAGER}),
        denied_message="Forbidden: You need Admin or Project Manager role in this team to create tasks",
    ),
    Actions.MANAGE_PROJECTS: ActionPolicy(
        privileged_roles=frozenset({PRIVILEGED_ROLE_ADMIN, PRIVILEGED_ROLE_PROJECT_MANAGER}),
        denied_message="Forbidden: You need Admin or Project Manager role in this team to create projects",
    ),
}


def is_global_admin(user: User) -> bool:
    return user.global_role == GLOBAL_ROLE_ADMIN


def is_authorized(
    user: User,
    action: str,
    team_id: Optional[str],
    team: Optional[Team],
) -> bool:
    """
    Pure authorization decision.

    Args:
        user: The acting user
        action: One of Actions.*
        team_id: The team the action targets, or None for team-less actions
        team: The team record read for team_id (None if it does not exist)

    Returns:
        True if the action is allowed.
    """
    if is_global_admin(user):
        return True

    policy = ACTION_POLICIES.get(action)
    if policy is None:
        return False

    if team_id is None:
        return policy.allow_without_team

    if team is None or team.id != team_id:
        return False

    if team.is_owner(str(user.id)):
        return True

    member = team.get_member(str(user.id))
    return member is not None and member.role in policy.privileged_roles


async def authorize(
    user: User,
    action: str,
    team_id: Optional[str],
    db: AsyncIOMotorDatabase,
) -> bool:
    """
    Authorize an action against a team, reading the team record once.

    The decision is based on a single read; concurrent membership edits may
    race with it and the last committed state wins.
    """
    team = None
    if team_id is not None and not is_global_admin(user):
        team = await TeamRepository(db).get_by_id(team_id)

    allowed = is_authorized(user, action, team_id, team)

    outcome = "allow" if allowed else "deny"
    authorization_decisions_total.labels(action=action, outcome=outcome).inc()
    logger.debug(f"Authorization {outcome}: user={user.id} action={action} team={team_id}")
    return allowed


async def require_authorized(
    user: User,
    action: str,
    team_id: Optional[str],
    db: AsyncIOMotorDatabase,
) -> None:
    """
    Like authorize(), but raises Unauthorized on deny.

    Raises:
        Unauthorized: if the action is not allowed
    """
    if not await authorize(user, action, team_id, db):
        policy = ACTION_POLICIES.get(action)
        raise Unauthorized(policy.denied_message if policy else None)
