from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from storage.json_store import JsonDocumentStore
from taskmind.models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


class SubtaskNotFoundError(LookupError):
    pass


class TaskStore(JsonDocumentStore):
    """Tasks scoped by owner. Lookups for another owner's task return None."""

    def __init__(self, path: str = "data/tasks.json"):
        super().__init__(path)

    def _load(self, docs: dict, owner_id: str, task_id: str) -> Optional[Task]:
        doc = docs.get(task_id)
        if doc is None or doc.get("owner_id") != owner_id:
            return None
        return Task.model_validate(doc)

    def _put(self, docs: dict, task: Task) -> Task:
        docs[task.id] = task.model_dump(mode="json")
        self._write(docs)
        return task

    def list_for_owner(self, owner_id: str) -> List[Task]:
        with self._lock:
            docs = self._read()
        tasks = [Task.model_validate(d) for d in docs.values() if d.get("owner_id") == owner_id]
        # newest first; ties keep the later insertion first
        tasks.sort(key=lambda t: t.created_at)
        tasks.reverse()
        return tasks

    def get(self, owner_id: str, task_id: str) -> Optional[Task]:
        with self._lock:
            return self._load(self._read(), owner_id, task_id)

    def create(self, owner_id: str, data: TaskCreate) -> Task:
        task = Task(owner_id=owner_id, **data.model_dump())
        with self._lock:
            docs = self._read()
            self._put(docs, task)
        logger.info("Created task %s for user %s", task.id, owner_id)
        return task

    def update(self, owner_id: str, task_id: str, updates: TaskUpdate) -> Optional[Task]:
        changes = updates.model_dump(exclude_unset=True)
        with self._lock:
            docs = self._read()
            task = self._load(docs, owner_id, task_id)
            if task is None:
                return None
            merged = task.model_dump()
            merged.update(changes)
            merged["updated_at"] = datetime.now()
            return self._put(docs, Task.model_validate(merged))

    def delete(self, owner_id: str, task_id: str) -> bool:
        with self._lock:
            docs = self._read()
            if self._load(docs, owner_id, task_id) is None:
                return False
            del docs[task_id]
            self._write(docs)
        logger.info("Deleted task %s", task_id)
        return True

    def toggle(self, owner_id: str, task_id: str) -> Optional[Task]:
        with self._lock:
            docs = self._read()
            task = self._load(docs, owner_id, task_id)
            if task is None:
                return None
            task.completed = not task.completed
            task.updated_at = datetime.now()
            return self._put(docs, task)

    def toggle_subtask(self, owner_id: str, task_id: str, subtask_id: str) -> Optional[Task]:
        """Flip one subtask. Raises SubtaskNotFoundError for an unknown subtask id."""
        with self._lock:
            docs = self._read()
            task = self._load(docs, owner_id, task_id)
            if task is None:
                return None
            subtask = next((s for s in task.subtasks if s.id == subtask_id), None)
            if subtask is None:
                raise SubtaskNotFoundError(subtask_id)
            subtask.completed = not subtask.completed
            task.updated_at = datetime.now()
            return self._put(docs, task)

    def count(self) -> int:
        with self._lock:
            return len(self._read())
