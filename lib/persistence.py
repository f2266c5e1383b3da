# =============================================================================
# lib/persistence.py - JSON File Persistence
# =============================================================================
# Saves the whole Store to a single JSON file and loads it back at startup.
# There is no per-record durability: every save rewrites the full file.
#
# Writes go to "<path>.tmp" first and are then renamed over the real file
# with os.replace, so a crash mid-write leaves the previous snapshot intact.
#
# Usage:
#   from lib.persistence import JsonFilePersistence
#   persistence = JsonFilePersistence("db.json")
#   store = persistence.load_or_empty()
#   persistence.save(store)
# =============================================================================

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from core.models import DatabaseSnapshot
from core.store import Store
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "db.json"


class PersistenceError(ApplicationError):
    """Raised when the db file cannot be written, read or parsed."""

    def __init__(
        self,
        message: str,
        path: Path,
        code: str = "PERSISTENCE_ERROR",
        suggestion: str | None = None,
    ):
        super().__init__(
            message,
            code=code,
            suggestion=suggestion,
            details={"path": str(path)},
        )
        self.path = path


class JsonFilePersistence:
    """
    Whole-store snapshots in one JSON file.

    The adapter only depends on the Store's data shape. It holds no lock
    itself; callers are expected to serialize access (see core/guard.py).
    """

    def __init__(self, path: str | os.PathLike = DEFAULT_DB_PATH):
        self.path = Path(path)

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def save(self, store: Store) -> None:
        """
        Serialize the entire store and atomically replace the db file.

        Raises:
            PersistenceError: If serialization or any filesystem step fails
        """
        try:
            data = store.to_snapshot().model_dump_json()
        except (ValueError, TypeError) as e:
            raise PersistenceError(
                f"Failed to serialize store: {e}",
                self.path,
                code="SERIALIZATION_ERROR",
            ) from e

        tmp_path = self.tmp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(
                f"Failed to write {self.path}: {e}",
                self.path,
                code="WRITE_ERROR",
                suggestion="Check that the directory exists and is writable",
            ) from e

        logger.debug(f"Saved {store!r} to {self.path}")

    def load(self) -> Store:
        """
        Read and parse the db file.

        Raises:
            PersistenceError: If the file is missing, unreadable or malformed
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PersistenceError(
                f"Database file not found: {self.path}",
                self.path,
                code="DB_FILE_MISSING",
            ) from e
        except OSError as e:
            raise PersistenceError(
                f"Failed to read {self.path}: {e}",
                self.path,
                code="READ_ERROR",
            ) from e

        try:
            snapshot = DatabaseSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise PersistenceError(
                f"Malformed database file {self.path}: {e.error_count()} error(s)",
                self.path,
                code="MALFORMED_DB_FILE",
                suggestion="Fix or remove the file; the service starts empty without it",
            ) from e

        return Store.from_snapshot(snapshot)

    def load_or_empty(self) -> Store:
        """
        Load the store, falling back to an empty one on any error.

        This is the startup contract: a missing or broken file never stops
        the service from starting.
        """
        try:
            store = self.load()
        except PersistenceError as e:
            if e.code == "DB_FILE_MISSING":
                logger.info(f"No database at {self.path}, starting with an empty store")
            else:
                logger.warning(f"Could not load database, starting empty: {e}")
            return Store()

        logger.info(f"Loaded {store!r} from {self.path}")
        return store
