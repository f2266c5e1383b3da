# =============================================================================
# app/routers/tasks.py - Task CRUD Endpoints
# =============================================================================
# Maps each task endpoint to one Store operation:
#
#   POST      /task       -> insert_task
#   GET       /task/{id}  -> get_task
#   GET       /tasks      -> list_tasks
#   PUT/PATCH /task       -> update_task (keyed by the body's id)
#   DELETE    /task/{id}  -> delete_task
#
# Handlers are plain `def` so they run on FastAPI's threadpool and block
# on the store lock without stalling the event loop.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Response
from pydantic import BaseModel

from app.dependencies import StoreGuardDep
from app.exceptions import TaskNotFoundError
from core.guard import MutationResult
from core.models import MAX_RECORD_ID, Task

logger = logging.getLogger(__name__)

router = APIRouter()

# Response header reporting whether the write reached the db file
PERSISTED_HEADER = "X-Persisted"

TaskIdPath = Annotated[int, Path(ge=0, le=MAX_RECORD_ID, description="Task ID")]


# =============================================================================
# Response Models
# =============================================================================

class MessageResponse(BaseModel):
    """Confirmation body for mutating endpoints."""
    message: str


def set_persisted_header(response: Response, result: MutationResult) -> None:
    response.headers[PERSISTED_HEADER] = "true" if result.persisted else "false"


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/task", response_model=MessageResponse)
def create_task(task: Task, guard: StoreGuardDep, response: Response):
    """
    Create a task, or overwrite the task with the same id.
    """
    result = guard.mutate(lambda store: store.insert_task(task))
    set_persisted_header(response, result)

    logger.info(f"Stored task {task.id}")
    return MessageResponse(message="Task created")


@router.get("/task/{task_id}", response_model=Task)
def read_task(task_id: TaskIdPath, guard: StoreGuardDep):
    task = guard.read(lambda store: store.get_task(task_id))
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.get("/tasks", response_model=list[Task])
def read_all_tasks(guard: StoreGuardDep):
    """
    List every task.

    Returns an empty list when the store has no tasks. Order is not
    guaranteed.
    """
    return guard.read(lambda store: store.list_tasks())


@router.api_route("/task", methods=["PUT", "PATCH"], response_model=MessageResponse)
def update_task(task: Task, guard: StoreGuardDep, response: Response):
    """
    Replace a task (upsert).

    The body's id selects the record; a task that does not exist yet is
    created.
    """
    result = guard.mutate(lambda store: store.update_task(task.id, task))
    set_persisted_header(response, result)

    logger.info(f"Updated task {task.id}")
    return MessageResponse(message="Task updated")


@router.delete("/task/{task_id}", response_model=MessageResponse)
def delete_task(task_id: TaskIdPath, guard: StoreGuardDep, response: Response):
    """
    Delete a task.

    Deleting an id that does not exist still answers 200.
    """
    result = guard.mutate(lambda store: store.delete_task(task_id))
    set_persisted_header(response, result)

    logger.info(f"Deleted task {task_id}")
    return MessageResponse(message="Task deleted")
