from typing import Generic, TypeVar, Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorCollection
from koperasi_reports.models.base import MongoModel

T = TypeVar("T", bound=MongoModel)

class BaseRepository(Generic[T]):
    def __init__(self, collection: AsyncIOMotorCollection, model_cls: type[T]):
        self.collection = collection
        self.model_cls = model_cls

    async def list(self, filter: Optional[Dict[str, Any]] = None, sort: Optional[List[tuple]] = None) -> List[T]:
        """List every document matching a filter, optionally sorted."""
        cursor = self.collection.find(filter or {})
        if sort:
            cursor = cursor.sort(sort)
        docs = await cursor.to_list(length=None)
        return [self.model_cls.from_mongo(doc) for doc in docs]

    async def create(self, model: T) -> T:
        """Create a new document."""
        data = model.to_mongo()
        result = await self.collection.insert_one(data)
        model.id = str(result.inserted_id)
        return model

    async def upsert(self, field: str, model: T) -> None:
        """Insert or replace the document whose `field` matches the model's."""
        data = model.to_mongo()
        await self.collection.replace_one({field: data[field]}, data, upsert=True)

    async def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return await self.collection.aggregate(pipeline).to_list(length=None)

    async def count(self, filter: Optional[Dict[str, Any]] = None) -> int:
        """Count documents matching a filter."""
        return await self.collection.count_documents(filter or {})
