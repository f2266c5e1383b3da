# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - persistence.py: Whole-store JSON file snapshots (atomic save, load)
# - utils.py: Shared base error class
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import ApplicationError
from lib.persistence import DEFAULT_DB_PATH, JsonFilePersistence, PersistenceError

__all__ = [
    # Persistence
    "DEFAULT_DB_PATH",
    "JsonFilePersistence",
    "PersistenceError",
    # Utils
    "ApplicationError",
]
