import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import TASK_DESCRIPTION_MAX_LENGTH, TASK_TITLE_MAX_LENGTH

TaskStatus = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high", "urgent"]


class Task(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    title: str = Field(..., min_length=1, max_length=TASK_TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=TASK_DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    scheduled: bool = False

    # Links; each may be None ("unassigned")
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    assigned_to: Optional[str] = None

    owner_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(populate_by_name=True)
