from __future__ import annotations

from datetime import datetime
from typing import TypedDict

# PUBLIC_INTERFACE
# Storage-level shape of a Todo as handed out by repositories.
# - _id: identifier assigned by the storage layer (ObjectId hex string)
# - text: the note text
# - createdAt: UTC creation timestamp, set server-side
#
# Functional form because "_id" is not usable as a class attribute name.
TodoEntity = TypedDict(
    "TodoEntity",
    {
        "_id": str,
        "text": str,
        "createdAt": datetime,
    },
)
