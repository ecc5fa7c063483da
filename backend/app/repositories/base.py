"""
Base Repository

Typed access to one MongoDB collection. Documents are stored with the
model's aliases (``_id``) and converted back into models on read.

Multi-document writes return the number of modified documents, so callers
such as the cascade steps can report what actually changed.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    CRUD helpers shared by the Team, Project, Task and User repositories.

    Subclasses set the collection and the model it holds:

        class ProjectRepository(BaseRepository[Project]):
            collection_name = "projects"
            model_class = Project
    """

    collection_name: str
    model_class: Type[T]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _to_model(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        return self.model_class(**doc) if doc is not None else None

    # -- reads ---------------------------------------------------------------

    async def get_by_id(self, id: str) -> Optional[T]:
        return self._to_model(await self.collection.find_one({"_id": id}))

    async def get_owned(self, id: str, owner_id: str) -> Optional[T]:
        """Fetch by id, or None if the record belongs to another user."""
        return self._to_model(
            await self.collection.find_one({"_id": id, "owner_id": owner_id})
        )

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        return self._to_model(await self.collection.find_one(query))

    async def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = 1,
    ) -> List[T]:
        """At most limit records after skipping skip; callers page with both."""
        cursor = self.collection.find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        docs = await cursor.skip(skip).limit(limit).to_list(limit)
        return [self.model_class(**doc) for doc in docs]

    async def exists(self, query: Dict[str, Any]) -> bool:
        return await self.collection.find_one(query, {"_id": 1}) is not None

    # -- writes --------------------------------------------------------------

    async def create(self, model: T) -> T:
        """Insert a model. Unique index violations surface as DuplicateKeyError."""
        await self.collection.insert_one(model.model_dump(by_alias=True))
        return model

    async def update(self, id: str, fields: Dict[str, Any]) -> Optional[T]:
        """$set fields on one record and return it re-read (None if it is gone)."""
        if fields:
            await self.collection.update_one({"_id": id}, {"$set": fields})
        return await self.get_by_id(id)

    async def update_raw(self, id: str, update_ops: Dict[str, Any]) -> None:
        """Apply raw update operators ($push, $pull, ...) to one record."""
        await self.collection.update_one({"_id": id}, update_ops)

    async def update_many(self, query: Dict[str, Any], fields: Dict[str, Any]) -> int:
        result = await self.collection.update_many(query, {"$set": fields})
        return result.modified_count

    async def update_many_raw(self, query: Dict[str, Any], update_ops: Dict[str, Any]) -> int:
        result = await self.collection.update_many(query, update_ops)
        return result.modified_count

    async def delete(self, id: str) -> bool:
        result = await self.collection.delete_one({"_id": id})
        return result.deleted_count > 0
