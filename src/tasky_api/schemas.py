from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Defaults filled into a creation payload when the field is absent or null.
TODO_DEFAULTS: Dict[str, Any] = {
    "text": "no text",
}


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Every field is optional; missing values are filled from TODO_DEFAULTS
    by with_defaults(). An empty string is a supplied value and is kept.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "buy milk",
            }
        }
    )

    text: Optional[str] = Field(default=None, description="Todo text; defaults to 'no text'")

    def with_defaults(self) -> "TodoCreate":
        """Return a copy where every None field present in TODO_DEFAULTS is filled in."""
        filled = {
            name: default
            for name, default in TODO_DEFAULTS.items()
            if getattr(self, name, None) is None
        }
        return self.model_copy(update=filled)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "65f1c0ffee0123456789abcd",
                "text": "buy milk",
                "createdAt": "2025-01-25T10:15:30.123000Z",
            }
        },
    )

    id: str = Field(..., alias="_id", description="Identifier assigned by the storage layer")
    text: str = Field(..., description="Todo text")
    createdAt: datetime = Field(..., description="Server-side creation timestamp (UTC)")


# PUBLIC_INTERFACE
class InsertResult(BaseModel):
    """
    Response body of POST /todos.
    """

    insertedId: str = Field(..., description="Identifier of the newly stored todo")


# PUBLIC_INTERFACE
class WizFileOut(BaseModel):
    """
    Response body of GET /wiz-file.
    """

    wiz: str = Field(..., description="Verbatim contents of the configured file")
