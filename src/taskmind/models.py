from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal, Optional, List

from pydantic import BaseModel, Field, field_validator


Priority = Literal["low", "medium", "high"]
PRIORITIES = ("low", "medium", "high")

DueStatus = Literal[
    "overdue", "due-soon", "due-today", "due-tomorrow", "due-this-week", "future"
]
Urgency = Literal["high", "medium", "low"]


def _new_id() -> str:
    return uuid.uuid4().hex


def _as_datetime(v):
    # calendar dates (and "YYYY-MM-DD" strings) mean midnight of that day
    if isinstance(v, date) and not isinstance(v, datetime):
        return datetime(v.year, v.month, v.day)
    if isinstance(v, str) and len(v.strip()) == 10:
        return datetime.fromisoformat(v.strip())
    return v


class Subtask(BaseModel):
    id: str = Field(default_factory=_new_id)
    title: str = Field(..., min_length=1)
    completed: bool = False


class TaskFields(BaseModel):
    """Editable fields shared by create payloads and stored tasks."""

    title: str = Field(..., min_length=1)
    description: str = ""
    priority: Priority = "medium"
    category: str = "General"
    due_date: Optional[datetime] = None
    estimated_time: Optional[int] = Field(None, gt=0)
    tags: List[str] = Field(default_factory=list)
    subtasks: List[Subtask] = Field(default_factory=list)
    notes: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_from_day(cls, v):
        return _as_datetime(v)

    @field_validator("subtasks", mode="before")
    @classmethod
    def subtasks_from_strings(cls, v):
        # proposals carry plain step strings; ids are assigned here
        if isinstance(v, list):
            return [{"title": s} if isinstance(s, str) else s for s in v]
        return v


class TaskCreate(TaskFields):
    pass


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    estimated_time: Optional[int] = Field(None, gt=0)
    tags: Optional[List[str]] = None
    subtasks: Optional[List[Subtask]] = None
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_from_day(cls, v):
        return _as_datetime(v)

    @field_validator("subtasks", mode="before")
    @classmethod
    def subtasks_from_strings(cls, v):
        if isinstance(v, list):
            return [{"title": s} if isinstance(s, str) else s for s in v]
        return v


class Task(TaskFields):
    id: str = Field(default_factory=_new_id)
    owner_id: str
    completed: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class TaskProposal(BaseModel):
    """A candidate task produced from model output, not yet persisted."""

    title: str = Field(..., min_length=1)
    description: str = ""
    priority: Priority = "medium"
    category: str = "General"
    due_date: Optional[date] = None
    estimated_time: Optional[int] = Field(None, gt=0)
    tags: List[str] = Field(default_factory=list)
    subtasks: List[str] = Field(default_factory=list)


class DueDateStatus(BaseModel):
    status: DueStatus
    urgency: Urgency
    label: str


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0
    high_priority_pending: int = 0


class User(BaseModel):
    id: str = Field(default_factory=_new_id)
    email: str
    name: str
    password_hash: str
    created_at: datetime = Field(default_factory=datetime.now)

    def public(self) -> "UserPublic":
        return UserPublic(id=self.id, email=self.email, name=self.name, created_at=self.created_at)


class UserPublic(BaseModel):
    id: str
    email: str
    name: str
    created_at: Optional[datetime] = None
