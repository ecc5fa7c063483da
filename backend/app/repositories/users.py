"""
User Repository

Centralizes all database operations for users.
"""

from typing import Any, Dict, List, Optional

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    collection_name = "users"
    model_class = User

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email. Emails are stored lower-cased."""
        return await self.find_one({"email": email.strip().lower()})

    async def set_global_role(self, email: str, role: str) -> Optional[User]:
        """Change a user's global role, looked up by email."""
        user = await self.get_by_email(email)
        if user is None:
            return None
        return await self.update(user.id, {"global_role": role})

    async def find_by_ids(self, user_ids: List[str]) -> List[Dict[str, Any]]:
        """Find raw user documents by list of IDs."""
        if not user_ids:
            return []
        cursor = self.collection.find({"_id": {"$in": user_ids}}, {"_id": 1, "name": 1, "email": 1})
        return await cursor.to_list(None)
