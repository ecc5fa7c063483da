"""
Team Membership Store

Owns Team records: creation, renaming and the ordered member list. Teams are
always looked up through their owner; a team owned by someone else is
reported as not found.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from app.core import utc_now
from app.core.constants import TEAM_ROLES
from app.core.errors import (
    CannotAddOwner,
    DuplicateMember,
    DuplicateName,
    InvalidInput,
    InvalidRole,
    MemberNotFound,
    TeamNotFound,
    UserNotFound,
)
from app.core.metrics import team_membership_changes_total
from app.models.team import Team, TeamMember
from app.repositories import TeamRepository, UserRepository
from app.services.notifications.service import notification_service

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise InvalidInput("Team name is required")
    return name.strip()


async def get_owned_team(team_id: str, owner_id: str, db: AsyncIOMotorDatabase) -> Team:
    """
    Fetch a team owned by owner_id.

    Raises:
        TeamNotFound: if the team does not exist or belongs to someone else
    """
    team = await TeamRepository(db).get_owned(team_id, owner_id)
    if team is None:
        raise TeamNotFound()
    return team


async def create_team(name: str, owner_id: str, db: AsyncIOMotorDatabase) -> Team:
    """Create an empty team owned by owner_id. Names are unique per owner."""
    team_repo = TeamRepository(db)
    clean = _clean_name(name)
    if await team_repo.name_taken(owner_id, clean):
        raise DuplicateName("Team name already exists")

    team = Team(name=clean, owner_id=owner_id)
    try:
        await team_repo.create(team)
    except DuplicateKeyError:
        raise DuplicateName("Team name already exists")

    logger.info(f"Team {team.id} created by {owner_id}")
    return team


async def rename_team(team: Team, name: str, db: AsyncIOMotorDatabase) -> Team:
    team_repo = TeamRepository(db)
    clean = _clean_name(name)
    if await team_repo.name_taken(team.owner_id, clean, exclude_id=team.id):
        raise DuplicateName("Team name already exists")

    try:
        updated = await team_repo.update(team.id, {"name": clean, "updated_at": utc_now()})
    except DuplicateKeyError:
        raise DuplicateName("Team name already exists")
    if updated is None:
        raise TeamNotFound()
    return updated


async def add_member(
    team: Team,
    email: str,
    role: str,
    db: AsyncIOMotorDatabase,
    invited_by: Optional[str] = None,
) -> Team:
    """
    Add a user to a team by email.

    Validation happens before any write. Once the member entry is stored the
    operation counts as successful; the invitation email is best-effort.

    Args:
        team: The team to add to
        email: Email of the user to add
        role: One of TEAM_ROLES
        db: Database instance
        invited_by: Display name used in the invitation email

    Returns:
        The updated Team

    Raises:
        InvalidRole: role is not an assignable membership role
        UserNotFound: no user has this email
        CannotAddOwner: the user owns the team
        DuplicateMember: the user is already a member
    """
    if role not in TEAM_ROLES:
        raise InvalidRole()
    if not email or not email.strip():
        raise InvalidInput("User email is required")

    user = await UserRepository(db).get_by_email(email)
    if user is None:
        raise UserNotFound()

    user_id = str(user.id)
    if team.is_owner(user_id):
        raise CannotAddOwner()
    if team.get_member(user_id) is not None:
        raise DuplicateMember()

    team_repo = TeamRepository(db)
    now = utc_now()
    member = TeamMember(user_id=user_id, role=role, added_at=now)
    if not await team_repo.add_member(team.id, member.model_dump(), now):
        # Added concurrently since the team was read
        raise DuplicateMember()

    team_membership_changes_total.labels(operation="add").inc()
    logger.info(f"User {user_id} added to team {team.id} as {role}")

    try:
        await notification_service.notify_team_member_added(user, team, invited_by)
    except Exception as e:
        logger.warning(f"Failed to send team invitation to {user.email}: {e}")

    updated = await team_repo.get_by_id(team.id)
    if updated is None:
        raise TeamNotFound()
    return updated


async def remove_member(team: Team, user_id: str, db: AsyncIOMotorDatabase) -> Team:
    """
    Remove a member from a team.

    Nothing else is touched: tasks assigned to the removed user keep their
    assigned_to value.

    Raises:
        MemberNotFound: user_id is not a member of the team
    """
    if team.get_member(user_id) is None:
        raise MemberNotFound()

    team_repo = TeamRepository(db)
    await team_repo.remove_member(team.id, user_id, utc_now())

    team_membership_changes_total.labels(operation="remove").inc()
    logger.info(f"User {user_id} removed from team {team.id}")

    updated = await team_repo.get_by_id(team.id)
    if updated is None:
        raise TeamNotFound()
    return updated
