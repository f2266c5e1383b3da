# =============================================================================
# core/models/snapshot.py - Persisted Database Layout
# =============================================================================
# Shape of the JSON file written after every mutation:
#
#   {
#       "tasks": {"5": {"id": 5, "name": "x", "completed": false}},
#       "users": {"1": {"id": 1, "username": "a", "password": "p"}}
#   }
#
# Ids are string-encoded because JSON object keys are always strings;
# pydantic converts them back to int on load.
# =============================================================================

from pydantic import BaseModel, Field

from .task import Task
from .user import User


class DatabaseSnapshot(BaseModel):
    """Full contents of the store, as written to disk."""

    tasks: dict[int, Task] = Field(default_factory=dict)
    users: dict[int, User] = Field(default_factory=dict)
