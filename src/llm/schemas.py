from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field
from taskmind.models import Priority

class TaskBreakdown(BaseModel):
    subtasks: List[str] = Field(default_factory=list)
    estimated_time: int = Field(default=60, gt=0)
    priority: Priority = "medium"
    category: str = "General"
    tags: List[str] = Field(default_factory=list)

class TaskImprovement(BaseModel):
    improved_title: str = Field(..., min_length=1)
    improved_description: str = ""
    suggestions: List[str] = Field(default_factory=list)
