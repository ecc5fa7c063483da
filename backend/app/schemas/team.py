from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import TEAM_NAME_MAX_LENGTH, TEAM_ROLE_MEMBER


class TeamMemberSchema(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    added_at: datetime


class TeamBase(BaseModel):
    name: str = Field(..., max_length=TEAM_NAME_MAX_LENGTH, description="Team name, unique per owner")


class TeamCreate(TeamBase):
    pass


class TeamUpdate(TeamBase):
    pass


class TeamResponse(TeamBase):
    id: str = Field(..., alias="_id")
    owner_id: str
    members: List[TeamMemberSchema]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(populate_by_name=True)


class TeamMemberAdd(BaseModel):
    email: str = Field(..., description="Email of the user to add", examples=["colleague@example.com"])
    # Not constrained here: unknown roles are rejected by the membership service
    role: str = Field(TEAM_ROLE_MEMBER, description="Member, Tech Lead or QA")
