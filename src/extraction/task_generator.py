import logging
from datetime import date, timedelta
from typing import List, Optional

from pydantic import ValidationError

from api.metrics import TASKS_GENERATED_TOTAL
from extraction.json_repair import load_first_object
from extraction.sanitizer import sanitize
from llm.llm_client import LLMClient
from llm.prompts import (
    BREAKDOWN_PROMPT,
    GENERATE_TASKS_PROMPT,
    IMPROVEMENTS_PROMPT,
    RECOMMENDATIONS_PROMPT,
)
from llm.schemas import TaskBreakdown, TaskImprovement
from taskmind.models import PRIORITIES, TaskProposal

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3


def _strings(value) -> List[str]:
    # a bare string is one item, not a sequence of characters
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


class TaskGenerator:
    """Asks the LLM for tasks and turns the answers into validated values."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm = llm_client or LLMClient()

    def generate_tasks(self, context: str, today: Optional[date] = None) -> List[TaskProposal]:
        today = today or date.today()
        prompt = GENERATE_TASKS_PROMPT.format(
            context=context,
            today=today.isoformat(),
            tomorrow=(today + timedelta(days=1)).isoformat(),
        )
        raw = self.llm.complete(prompt)
        proposals = sanitize(raw, context, today)
        TASKS_GENERATED_TOTAL.inc(len(proposals))
        logger.info("Generated %d task proposals", len(proposals))
        return proposals

    def recommend(self, title: str, existing_titles: List[str]) -> List[str]:
        prompt = RECOMMENDATIONS_PROMPT.format(title=title, existing=", ".join(existing_titles))
        raw = self.llm.complete(prompt)
        lines = [line.strip() for line in raw.splitlines()]
        return [line for line in lines if line][:MAX_RECOMMENDATIONS]

    def breakdown(self, title: str, context: str = "") -> TaskBreakdown:
        raw = self.llm.complete(BREAKDOWN_PROMPT.format(title=title, context=context))
        data = load_first_object(raw)
        if data is not None:
            priority = data.get("priority")
            try:
                return TaskBreakdown(
                    subtasks=_strings(data.get("subtasks")),
                    estimated_time=data.get("estimatedTime") or 60,
                    priority=priority if priority in PRIORITIES else "medium",
                    category=data.get("category") or "General",
                    tags=_strings(data.get("tags")),
                )
            except (ValidationError, TypeError) as e:
                logger.warning("Failed to parse task breakdown: %s", e)

        return TaskBreakdown(
            subtasks=[f"Break down: {title}"],
            estimated_time=60,
            priority="medium",
            category="General",
            tags=["breakdown"],
        )

    def improve(self, title: str, description: str = "") -> TaskImprovement:
        raw = self.llm.complete(IMPROVEMENTS_PROMPT.format(title=title, description=description))
        data = load_first_object(raw)
        if data is not None:
            try:
                return TaskImprovement(
                    improved_title=data.get("improvedTitle") or title,
                    improved_description=data.get("improvedDescription") or description,
                    suggestions=_strings(data.get("suggestions")),
                )
            except (ValidationError, TypeError) as e:
                logger.warning("Failed to parse task improvements: %s", e)

        return TaskImprovement(
            improved_title=title,
            improved_description=description,
            suggestions=[
                "Consider adding specific deadlines",
                "Break into smaller steps",
                "Define success criteria",
            ],
        )
