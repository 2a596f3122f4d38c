from __future__ import annotations

from typing import Iterable

from taskmind.models import Task, TaskStats


def summarize(tasks: Iterable[Task]) -> TaskStats:
    """Counts shown on the dashboard header."""
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.completed)
    pending = len(tasks) - completed
    rate = round(completed / len(tasks) * 100) if tasks else 0
    high_pending = sum(1 for t in tasks if not t.completed and t.priority == "high")

    return TaskStats(
        total=len(tasks),
        completed=completed,
        pending=pending,
        completion_rate=rate,
        high_priority_pending=high_pending,
    )
