# =============================================================================
# core/guard.py - Single-Writer Store Guard
# =============================================================================
# One lock covers the whole Store (tasks and users together). Every read
# runs under it, and every mutation runs under it together with the full
# snapshot to disk that follows, so a request's critical section is
# "mutate + flush".
#
# Usage:
#   guard = StoreGuard(store, persistence)
#   task = guard.read(lambda s: s.get_task(5))
#   result = guard.mutate(lambda s: s.insert_task(task))
#   if not result.persisted:
#       ...  # in-memory state still holds the change
# =============================================================================

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.store import Store
from lib.persistence import JsonFilePersistence, PersistenceError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LOCK_TIMEOUT = 10.0


class StoreUnavailableError(ApplicationError):
    """Raised when the store lock cannot be acquired in time."""

    def __init__(self, timeout: float):
        super().__init__(
            message=f"Store is busy: lock not acquired within {timeout:g}s",
            code="STORE_UNAVAILABLE",
            suggestion="Retry the request shortly",
            details={"timeout_seconds": timeout},
        )


@dataclass(frozen=True)
class MutationResult(Generic[T]):
    """
    Outcome of a guarded mutation.

    Attributes:
        value: Whatever the store operation returned
        persisted: True if the snapshot after the mutation reached disk
        error: Persistence error message when persisted is False
    """
    value: T
    persisted: bool
    error: str | None = None


class StoreGuard:
    """
    Owns the Store and serializes all access to it.

    Store operations never block, so the lock is held only for the
    operation itself plus, for mutations, the file write.
    """

    def __init__(
        self,
        store: Store,
        persistence: JsonFilePersistence,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
        strict_persistence: bool = False,
    ):
        self._store = store
        self._persistence = persistence
        self._lock = threading.Lock()
        self.lock_timeout = lock_timeout
        self.strict_persistence = strict_persistence

    @contextmanager
    def _locked(self) -> Iterator[Store]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.error(f"Store lock not acquired within {self.lock_timeout}s")
            raise StoreUnavailableError(self.lock_timeout)
        try:
            yield self._store
        finally:
            self._lock.release()

    def read(self, operation: Callable[[Store], T]) -> T:
        """Run a read-only operation while holding the lock."""
        with self._locked() as store:
            return operation(store)

    def mutate(self, operation: Callable[[Store], T]) -> MutationResult[T]:
        """
        Run a mutating operation and persist the whole store.

        Both steps happen under the lock. A failed save is logged and
        reported on the result; the in-memory change is kept either way.

        Raises:
            StoreUnavailableError: If the lock times out
            PersistenceError: If the save fails and strict_persistence is set
        """
        with self._locked() as store:
            value = operation(store)
            try:
                self._persistence.save(store)
            except PersistenceError as e:
                if self.strict_persistence:
                    raise
                logger.warning(f"Store changed in memory but was not persisted: {e}")
                return MutationResult(value=value, persisted=False, error=e.message)

        return MutationResult(value=value, persisted=True)
