# =============================================================================
# core/store.py - In-Memory Task & User Store
# =============================================================================
# The Store holds every record the service knows about:
# - tasks: task id -> Task
# - users: user id -> User
#
# It is a plain data container. It knows nothing about HTTP, locking or
# files; the guard (core/guard.py) serializes access and the persistence
# adapter (lib/persistence.py) snapshots it to disk.
#
# Usage:
#   store = Store()
#   store.insert_task(Task(id=5, name="x", completed=False))
#   store.get_task(5)  # Task(id=5, ...)
# =============================================================================

from __future__ import annotations

from core.models import DatabaseSnapshot, Task, User


class Store:
    """
    Two upsert-only mappings keyed by record id.

    Inserting with an existing key overwrites the previous record, so
    create and update are the same operation. Lookups return None for
    absent ids instead of raising.
    """

    def __init__(
        self,
        tasks: dict[int, Task] | None = None,
        users: dict[int, User] | None = None,
    ):
        self.tasks: dict[int, Task] = dict(tasks or {})
        self.users: dict[int, User] = dict(users or {})

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def insert_task(self, task: Task) -> None:
        """Insert or overwrite a task under its own id."""
        self.tasks[task.id] = task

    def get_task(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def list_tasks(self) -> list[Task]:
        """Return all tasks. Order is not part of the contract."""
        return list(self.tasks.values())

    def delete_task(self, task_id: int) -> None:
        """Remove a task. Deleting an unknown id does nothing."""
        self.tasks.pop(task_id, None)

    def update_task(self, task_id: int, task: Task) -> None:
        """
        Upsert a task under an explicit id.

        The stored record always carries the key it is stored under, so if
        task.id differs from task_id the copy kept here is re-keyed to
        task_id.

        Args:
            task_id: Key to store the task under
            task: New task contents
        """
        if task.id != task_id:
            task = task.model_copy(update={"id": task_id})
        self.tasks[task_id] = task

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def insert_user(self, user: User) -> None:
        """Insert or overwrite a user. Usernames are not checked for clashes."""
        self.users[user.id] = user

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        """
        Find a user by username with a linear scan.

        If several users share the username, the one inserted first wins
        (dict iteration follows insertion order, and overwriting an existing
        id keeps its original position).
        """
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    # -------------------------------------------------------------------------
    # Introspection / Snapshots
    # -------------------------------------------------------------------------

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    @property
    def user_count(self) -> int:
        return len(self.users)

    def to_snapshot(self) -> DatabaseSnapshot:
        """Copy the current contents into a serializable snapshot."""
        return DatabaseSnapshot(tasks=dict(self.tasks), users=dict(self.users))

    @classmethod
    def from_snapshot(cls, snapshot: DatabaseSnapshot) -> Store:
        return cls(tasks=snapshot.tasks, users=snapshot.users)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Store):
            return NotImplemented
        return self.tasks == other.tasks and self.users == other.users

    def __repr__(self) -> str:
        return f"Store(tasks={self.task_count}, users={self.user_count})"
