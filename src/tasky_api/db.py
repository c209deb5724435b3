from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING

from .models import TodoEntity
from .repositories import Repository, utc_now
from .schemas import TodoCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fields:
    collection: str = "todos"
    id: str = "_id"
    text: str = "text"
    created_at: str = "createdAt"


_FIELDS = _Fields()


class MongoTodoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface on the Motor driver.

    The driver owns connection pooling; this class keeps a single client for the
    lifetime of the application.
    """

    name = "mongo"

    def __init__(self, client: Any, database_name: str) -> None:
        self._client = client
        self._collection = client[database_name][_FIELDS.collection]

    @classmethod
    def from_uri(cls, uri: str, database_name: str) -> "MongoTodoRepository":
        # tz_aware so createdAt comes back as an aware UTC datetime
        return cls(AsyncIOMotorClient(uri, tz_aware=True), database_name)

    async def connect(self) -> None:
        # Motor connects lazily; ping forces a round trip so startup fails fast.
        await self._client.admin.command("ping")
        logger.info("Connected to MongoDB")

    async def ensure_indexes(self) -> None:
        name = await self._collection.create_index([(_FIELDS.created_at, ASCENDING)])
        logger.info("Ensured index %s on %s", name, _FIELDS.collection)

    def _doc_to_entity(self, doc: Mapping[str, Any]) -> TodoEntity:
        return {
            "_id": str(doc[_FIELDS.id]),
            "text": doc.get(_FIELDS.text),
            "createdAt": doc.get(_FIELDS.created_at),
        }  # type: ignore[typeddict-item]

    async def create(self, data: TodoCreate) -> TodoEntity:
        filled = data.with_defaults()
        doc: Dict[str, Any] = {
            _FIELDS.text: filled.text,
            _FIELDS.created_at: utc_now(),
        }
        result = await self._collection.insert_one(doc)
        doc[_FIELDS.id] = result.inserted_id
        return self._doc_to_entity(doc)

    async def list(self) -> List[TodoEntity]:
        docs = await self._collection.find({}).to_list(length=None)
        return [self._doc_to_entity(d) for d in docs]

    async def close(self) -> None:
        self._client.close()
        logger.info("Closed MongoDB client")
