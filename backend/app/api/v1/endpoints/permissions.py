from typing import Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers.responses import RESP_AUTH
from app.core.permissions import Actions, authorize, is_global_admin
from app.db.mongodb import get_database
from app.models.user import User
from app.schemas.permissions import PermissionsResponse

router = CustomAPIRouter()


@router.get("/", response_model=PermissionsResponse, responses={**RESP_AUTH})
async def read_permissions(
    team_id: Optional[str] = None,
    current_user: User = Depends(deps.get_current_active_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Report what the caller may do in a team. Without a team_id both
    capabilities are reported as false.
    """
    can_create_tasks = False
    can_manage_projects = False
    if team_id:
        can_create_tasks = await authorize(current_user, Actions.CREATE_TASKS, team_id, db)
        can_manage_projects = await authorize(current_user, Actions.MANAGE_PROJECTS, team_id, db)

    return PermissionsResponse(
        can_create_tasks=can_create_tasks,
        can_manage_projects=can_manage_projects,
        is_global_admin=is_global_admin(current_user),
    )
