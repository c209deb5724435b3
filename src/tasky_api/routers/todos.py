from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..repositories import Repository, get_repository
from ..schemas import InsertResult, TodoCreate, TodoOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description=(
        "Return every stored todo as a JSON array. No filtering, sorting or pagination; "
        "order is whatever the storage layer yields."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
    },
)
async def list_todos(repo: Repository = Depends(_get_repo)) -> List[TodoOut]:
    """
    List all todos.
    """
    items = await repo.list()
    return [TodoOut(**it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=InsertResult,
    summary="Create Todo",
    description=(
        "Store a new todo. 'text' defaults to 'no text' when absent; createdAt is set "
        "by the server. Returns the identifier assigned by the storage layer."
    ),
    responses={
        200: {"description": "Todo created"},
        422: {"description": "Validation error"},
    },
)
async def create_todo(
    payload: Optional[TodoCreate] = None,
    repo: Repository = Depends(_get_repo),
) -> InsertResult:
    """
    Create a new Todo. A request without a body is treated as an empty object.
    """
    created = await repo.create(payload or TodoCreate())
    logger.debug("Inserted todo %s", created["_id"])
    return InsertResult(insertedId=created["_id"])
