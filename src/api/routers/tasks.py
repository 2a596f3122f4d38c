import logging
from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from api.dependencies import get_now, get_task_store
from api.metrics import TASKS_TOTAL
from api.security import get_current_user
from storage.task_store import SubtaskNotFoundError, TaskStore
from taskmind.due_dates import classify
from taskmind.models import DueDateStatus, Task, TaskCreate, TaskStats, TaskUpdate, User
from taskmind.stats import summarize

router = APIRouter(prefix="/api/tasks")
logger = logging.getLogger(__name__)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Task not found")


@router.get("", response_model=List[Task])
def list_tasks(
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> List[Task]:
    """All tasks of the current user, newest first."""
    return store.list_for_owner(user.id)


@router.post("", status_code=201, response_model=Task)
def create_task(
    payload: TaskCreate,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    task = store.create(user.id, payload)
    TASKS_TOTAL.set(store.count())
    return task


@router.get("/stats", response_model=TaskStats)
def task_stats(
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> TaskStats:
    return summarize(store.list_for_owner(user.id))


@router.get("/due-status", response_model=Dict[str, DueDateStatus])
def due_status(
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
    now: datetime = Depends(get_now),
) -> Dict[str, DueDateStatus]:
    """Urgency badge for every open task that has a due date.

    Clients poll this on their own interval; ``now`` is read per request.
    """
    return {
        t.id: classify(t.due_date, now)
        for t in store.list_for_owner(user.id)
        if t.due_date is not None and not t.completed
    }


@router.put("/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    payload: TaskUpdate,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    try:
        task = store.update(user.id, task_id, payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    if task is None:
        raise _not_found()
    return task


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    if not store.delete(user.id, task_id):
        raise _not_found()
    TASKS_TOTAL.set(store.count())
    return {"message": "Task deleted successfully"}


@router.patch("/{task_id}/toggle", response_model=Task)
def toggle_task(
    task_id: str,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    task = store.toggle(user.id, task_id)
    if task is None:
        raise _not_found()
    return task


@router.patch("/{task_id}/subtasks/{subtask_id}/toggle", response_model=Task)
def toggle_subtask(
    task_id: str,
    subtask_id: str,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> Task:
    try:
        task = store.toggle_subtask(user.id, task_id, subtask_id)
    except SubtaskNotFoundError:
        raise HTTPException(status_code=404, detail="Subtask not found")
    if task is None:
        raise _not_found()
    return task
