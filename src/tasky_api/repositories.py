from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List

from bson import ObjectId
from fastapi import Request

from .models import TodoEntity
from .schemas import TodoCreate
from .settings import Settings

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds, the precision of BSON dates."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    name: str = "abstract"

    @abstractmethod
    async def connect(self) -> None:
        """Establish the backend connection. Raise if the backend is unreachable."""

    @abstractmethod
    async def ensure_indexes(self) -> None:
        """Make sure the ascending createdAt index exists."""

    @abstractmethod
    async def create(self, data: TodoCreate) -> TodoEntity:
        """Store a new todo stamped with the current UTC time and return it with its _id."""

    @abstractmethod
    async def list(self) -> List[TodoEntity]:
        """Return every stored todo in the backend's natural order. No filter, no pagination."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
        return None


class InMemoryRepository(Repository):
    """
    In-memory repository suitable for testing and local runs without MongoDB.
    Items keep insertion order.
    """

    name = "memory"

    def __init__(self) -> None:
        self._items: Dict[str, TodoEntity] = {}
        self._indexes: List[str] = []

    def _now(self) -> datetime:
        return utc_now()

    async def connect(self) -> None:
        return None

    async def ensure_indexes(self) -> None:
        if "createdAt" not in self._indexes:
            self._indexes.append("createdAt")

    async def create(self, data: TodoCreate) -> TodoEntity:
        filled = data.with_defaults()
        entity: TodoEntity = {
            "_id": str(ObjectId()),
            "text": filled.text,  # type: ignore[typeddict-item]
            "createdAt": self._now(),
        }
        self._items[entity["_id"]] = entity
        return entity.copy()  # type: ignore[return-value]

    async def list(self) -> List[TodoEntity]:
        # Return copies to avoid external mutation
        return [t.copy() for t in self._items.values()]  # type: ignore[misc]


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - mongo: MongoTodoRepository (Motor async driver)
    - memory: InMemoryRepository
    """
    if settings.persistence_backend == "memory":
        return InMemoryRepository()

    from .db import MongoTodoRepository

    return MongoTodoRepository.from_uri(settings.mongo_uri, settings.mongo_db_name)


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning the repository created during application startup.
    """
    return request.app.state.repository
