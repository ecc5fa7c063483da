"""
Schema Exports

Request and response models of the HTTP layer.
"""

from app.schemas.permissions import PermissionsResponse
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.schemas.team import (
    TeamCreate,
    TeamMemberAdd,
    TeamMemberSchema,
    TeamResponse,
    TeamUpdate,
)

__all__ = [
    "PermissionsResponse",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "TeamCreate",
    "TeamMemberAdd",
    "TeamMemberSchema",
    "TeamResponse",
    "TeamUpdate",
]
