from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import TASK_DESCRIPTION_MAX_LENGTH, TASK_TITLE_MAX_LENGTH
from app.models.task import TaskPriority, TaskStatus


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=TASK_DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    scheduled: bool = False
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    assigned_to: Optional[str] = None

    @field_validator("team_id", "project_id", mode="before")
    def blank_link_is_none(cls, v):
        return _blank_to_none(v)


class TaskUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied.

    Sending project_id as null unassigns the project. Sending team_id as null
    unassigns the team, unless the task's project is shared with exactly one
    team, in which case the task joins that team. Blank ids count as null.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=TASK_DESCRIPTION_MAX_LENGTH)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    scheduled: Optional[bool] = None
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    assigned_to: Optional[str] = None

    @field_validator("team_id", "project_id", mode="before")
    def blank_link_is_none(cls, v):
        return _blank_to_none(v)


class TaskResponse(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    scheduled: bool
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    assigned_to: Optional[str] = None
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)
