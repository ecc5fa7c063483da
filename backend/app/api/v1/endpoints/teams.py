import logging
from typing import List

from fastapi import Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers.responses import (
    RESP_AUTH,
    RESP_AUTH_400_404,
    RESP_AUTH_400_404_409,
    RESP_AUTH_400_409,
    RESP_AUTH_404,
)
from app.api.v1.helpers.teams import enrich_team_with_users
from app.db.mongodb import get_database
from app.models.user import User
from app.repositories import TeamRepository
from app.schemas.team import TeamCreate, TeamMemberAdd, TeamResponse, TeamUpdate
from app.services import cascade, membership

logger = logging.getLogger(__name__)

router = CustomAPIRouter()


@router.post(
    "/",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_409},
)
async def create_team(
    team_in: TeamCreate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create a new team. The creator becomes its owner.
    """
    team = await membership.create_team(team_in.name, str(current_user.id), db)
    return team.model_dump(by_alias=True)


@router.get("/", response_model=List[TeamResponse], responses={**RESP_AUTH})
async def read_teams(
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    List the teams owned by the current user.
    """
    teams = await TeamRepository(db).find_owned(str(current_user.id))
    return [await enrich_team_with_users(team, db) for team in teams]


@router.get("/{team_id}", response_model=TeamResponse, responses={**RESP_AUTH_404})
async def read_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Get team details including member names.
    """
    team = await membership.get_owned_team(team_id, str(current_user.id), db)
    return await enrich_team_with_users(team, db)


@router.put("/{team_id}", response_model=TeamResponse, responses={**RESP_AUTH_400_404_409})
async def update_team(
    team_id: str,
    team_in: TeamUpdate,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Rename a team. Owner only.
    """
    team = await membership.get_owned_team(team_id, str(current_user.id), db)
    updated = await membership.rename_team(team, team_in.name, db)
    return await enrich_team_with_users(updated, db)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT, responses={**RESP_AUTH_404})
async def delete_team(
    team_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Delete a team. Owner only.

    Projects and tasks referencing the team are detached from it, not deleted.
    """
    owner_id = str(current_user.id)
    team = await membership.get_owned_team(team_id, owner_id, db)

    await TeamRepository(db).delete(team.id)
    logger.info(f"Team {team.id} deleted by {owner_id}")

    result = await cascade.on_team_deleted(team, owner_id, db)
    if not result.complete:
        logger.warning(f"Team {team.id} deleted, cascade incomplete: {result.failed}")
    return None


@router.post(
    "/{team_id}/members",
    response_model=TeamResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_404_409},
)
async def add_team_member(
    team_id: str,
    member_in: TeamMemberAdd,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Add a user to the team by email. Owner only.
    """
    team = await membership.get_owned_team(team_id, str(current_user.id), db)
    updated = await membership.add_member(
        team, member_in.email, member_in.role, db, invited_by=current_user.name
    )
    return await enrich_team_with_users(updated, db)


@router.delete(
    "/{team_id}/members/{user_id}",
    response_model=TeamResponse,
    responses={**RESP_AUTH_400_404},
)
async def remove_team_member(
    team_id: str,
    user_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Remove a member from the team. Owner only.
    """
    team = await membership.get_owned_team(team_id, str(current_user.id), db)
    updated = await membership.remove_member(team, user_id, db)
    return await enrich_team_with_users(updated, db)
