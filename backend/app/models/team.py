import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import TEAM_NAME_MAX_LENGTH, TEAM_ROLE_MEMBER


class TeamMember(BaseModel):
    user_id: str
    role: str = TEAM_ROLE_MEMBER  # "Member", "Tech Lead", "QA"
    added_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Team(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str = Field(..., min_length=1, max_length=TEAM_NAME_MAX_LENGTH)
    owner_id: str
    # Ownership is tracked by owner_id only; the owner never appears here.
    members: List[TeamMember] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(populate_by_name=True)

    def is_owner(self, user_id: str) -> bool:
        return self.owner_id == user_id

    def get_member(self, user_id: str) -> Optional[TeamMember]:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None
