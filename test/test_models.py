from datetime import date, datetime

import pytest
from pydantic import ValidationError

from taskmind.models import Task, TaskCreate, TaskProposal, TaskUpdate
from taskmind.stats import summarize


def test_task_defaults():
    t = TaskCreate(title="Test")
    assert t.priority == "medium"
    assert t.category == "General"
    assert t.tags == [] and t.subtasks == []


def test_blank_title_rejected():
    with pytest.raises(ValidationError):
        TaskCreate(title="   ")
    with pytest.raises(ValidationError):
        TaskUpdate(title=" ")


def test_invalid_priority_and_estimate_rejected():
    with pytest.raises(ValidationError):
        TaskCreate(title="X", priority="urgent")
    with pytest.raises(ValidationError):
        TaskCreate(title="X", estimated_time=0)


def test_string_subtasks_get_ids():
    t = TaskCreate(title="Trip", subtasks=["Book flight", "Pack"])
    assert [s.title for s in t.subtasks] == ["Book flight", "Pack"]
    assert all(s.id and not s.completed for s in t.subtasks)
    assert t.subtasks[0].id != t.subtasks[1].id


def test_calendar_due_date_becomes_midnight():
    assert TaskCreate(title="X", due_date=date(2024, 6, 2)).due_date == datetime(2024, 6, 2)
    assert TaskCreate(title="X", due_date="2024-06-02").due_date == datetime(2024, 6, 2)
    assert TaskCreate(title="X", due_date="2024-06-02T09:30:00").due_date == datetime(2024, 6, 2, 9, 30)


def test_proposal_feeds_task_create():
    proposal = TaskProposal(title="Trip", due_date=date(2024, 6, 3), subtasks=["Book"], tags=["travel"])
    t = TaskCreate(**proposal.model_dump())
    assert t.due_date == datetime(2024, 6, 3)
    assert t.subtasks[0].title == "Book"


def test_summarize():
    tasks = [
        Task(owner_id="u", title="A", completed=True),
        Task(owner_id="u", title="B", priority="high"),
        Task(owner_id="u", title="C", priority="high", completed=True),
    ]
    s = summarize(tasks)
    assert (s.total, s.completed, s.pending) == (3, 2, 1)
    assert s.completion_rate == 67
    assert s.high_priority_pending == 1
    assert summarize([]).completion_rate == 0
