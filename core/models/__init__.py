# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - task.py: Task record
# - user.py: User record and login credentials
# - snapshot.py: On-disk layout of the whole store
#
# These models define the "contract" between API, store and the db file.
# =============================================================================

from .task import MAX_RECORD_ID, Task
from .user import LoginRequest, User
from .snapshot import DatabaseSnapshot

__all__ = [
    "MAX_RECORD_ID",
    "Task",
    "User",
    "LoginRequest",
    "DatabaseSnapshot",
]
