# =============================================================================
# core/models/task.py - Task Schema
# =============================================================================
# A task is the main record type of the store:
# - id: caller-supplied unsigned 64-bit key
# - name: free text
# - completed: done flag
#
# The same schema is used for request bodies, responses and the persisted
# snapshot. Creating and updating are both upserts keyed by id.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field

# Largest value an unsigned 64-bit id can take
MAX_RECORD_ID = 2**64 - 1


class Task(BaseModel):
    """
    A single task record.

    Example:
        {
            "id": 5,
            "name": "Write release notes",
            "completed": false
        }
    """

    # Primary key, chosen by the client
    id: int = Field(
        ...,
        ge=0,
        le=MAX_RECORD_ID,
        description="Unsigned task identifier (primary key)"
    )

    name: str = Field(
        ...,
        description="Human-readable task name"
    )

    completed: bool = Field(
        ...,
        description="Whether the task is done"
    )

    # Strict: "5", 5.0 or "yes" are rejected instead of coerced
    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "example": {"id": 5, "name": "Write release notes", "completed": False}
        },
    )
