from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _drop_blank_ids(v):
    if isinstance(v, list):
        return [t for t in v if not (isinstance(t, str) and not t.strip())]
    return v


class ProjectCreate(BaseModel):
    name: str = Field(..., description="The name of the project", examples=["API"])
    icon: str = Field("", description="Icon shown next to the project")
    team_ids: List[str] = Field(default_factory=list, description="Teams the project is shared with")

    @field_validator("team_ids", mode="before")
    def drop_blank_team_ids(cls, v):
        return _drop_blank_ids(v)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, description="New name for the project")
    icon: Optional[str] = Field(None, description="New icon")
    team_ids: Optional[List[str]] = Field(None, description="Replaces the project's teams")

    @field_validator("team_ids", mode="before")
    def drop_blank_team_ids(cls, v):
        return _drop_blank_ids(v)


class ProjectResponse(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    icon: str
    owner_id: str
    team_ids: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)
