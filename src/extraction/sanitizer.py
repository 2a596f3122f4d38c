"""
Turns raw model text into validated task proposals.

Two extraction strategies are tried in order: a structured one that reads
the first JSON array in the text, and a line-based one used when no usable
array is present. Whatever comes out is then given a due date that lies
strictly after ``today``.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from extraction.json_repair import load_first_array
from taskmind.due_dates import days_between
from taskmind.models import PRIORITIES, TaskProposal

logger = logging.getLogger(__name__)

GENERATED_CATEGORY = "AI Generated"
GENERATED_DESCRIPTION = "AI-generated task based on your request"
GENERATED_TAGS = ["ai-generated"]
DEFAULT_ESTIMATE_MIN = 30
MAX_LINE_TASKS = 4
SIMPLE_CONTEXT_MAX_LEN = 50
MAX_HORIZON_DAYS = 365

_ORDINAL_PREFIX = re.compile(r"^\d+[.)]\s*")


def _today(today: Union[date, datetime]) -> date:
    return today.date() if isinstance(today, datetime) else today


def is_simple_request(context: str) -> bool:
    """A short request naming a single thing yields a single task."""
    return (
        len(context) < SIMPLE_CONTEXT_MAX_LEN
        and " and " not in context
        and "," not in context
    )


def fallback_due_date(priority: str, index: int, today: Union[date, datetime]) -> date:
    """Deterministic future due date from priority and output position."""
    base = _today(today)
    if priority == "high":
        offset = 1 + index % 2
    elif priority == "medium":
        offset = 3 + index % 5
    else:
        offset = 7 + index % 15
    return base + timedelta(days=offset)


def _parse_due(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("title")
        if isinstance(item, (str, int, float)) and str(item).strip():
            out.append(str(item).strip())
    return out


def _coerce(item: Any) -> Optional[TaskProposal]:
    if not isinstance(item, dict):
        return None
    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        return None

    priority = item.get("priority")
    priority = priority.lower() if isinstance(priority, str) else None
    if priority not in PRIORITIES:
        priority = "medium"

    category = item.get("category")
    estimated = item.get("estimatedTime", item.get("estimated_time"))
    try:
        estimated = int(estimated) if estimated is not None else None
    except (TypeError, ValueError, OverflowError):
        estimated = None
    if estimated is not None and estimated <= 0:
        estimated = None

    description = item.get("description")
    try:
        return TaskProposal(
            title=title.strip(),
            description=description.strip() if isinstance(description, str) else "",
            priority=priority,
            category=category.strip() if isinstance(category, str) and category.strip() else "General",
            due_date=_parse_due(item.get("dueDate", item.get("due_date"))),
            estimated_time=estimated,
            tags=_str_list(item.get("tags")),
            subtasks=_str_list(item.get("subtasks")),
        )
    except ValidationError as e:
        logger.debug("Skipping invalid task item: %s", e)
        return None


def extract_structured(raw_text: str) -> Optional[List[TaskProposal]]:
    """Proposals from the first JSON array in the text.

    Returns None when there is no parseable array, so the caller can switch
    to line extraction.
    """
    items = load_first_array(raw_text)
    if items is None:
        return None
    proposals = []
    for item in items:
        proposal = _coerce(item)
        if proposal is not None:
            proposals.append(proposal)
    return proposals


def extract_lines(raw_text: str, context_hint: str) -> List[TaskProposal]:
    lines = []
    for line in raw_text.splitlines():
        line = _ORDINAL_PREFIX.sub("", line.strip()).strip()
        if line:
            lines.append(line)

    limit = 1 if is_simple_request(context_hint) else MAX_LINE_TASKS
    proposals = []
    for index, line in enumerate(lines[:limit]):
        priority = "high" if index < 2 else "medium" if index < 4 else "low"
        proposals.append(
            TaskProposal(
                title=line,
                description=GENERATED_DESCRIPTION,
                priority=priority,
                category=GENERATED_CATEGORY,
                estimated_time=DEFAULT_ESTIMATE_MIN,
                tags=list(GENERATED_TAGS),
                subtasks=[],
            )
        )
    return proposals


def normalize_due_dates(
    proposals: List[TaskProposal], today: Union[date, datetime]
) -> List[TaskProposal]:
    day = _today(today)
    out = []
    for index, proposal in enumerate(proposals):
        due = proposal.due_date
        if due is None or not 0 < days_between(due, day) <= MAX_HORIZON_DAYS:
            due = fallback_due_date(proposal.priority, index, day)
            proposal = proposal.model_copy(update={"due_date": due})
        out.append(proposal)
    return out


def _is_future(proposal: TaskProposal, today: date) -> bool:
    return proposal.due_date is None or proposal.due_date > today


def sanitize(
    raw_text: str, context_hint: str, today: Union[date, datetime]
) -> List[TaskProposal]:
    """Validated proposals from raw model output.

    Every returned proposal with a due date is dated strictly after ``today``.
    Malformed input never raises; empty input gives an empty list.
    """
    raw_text = raw_text or ""
    if not raw_text.strip():
        return []

    proposals = extract_structured(raw_text)
    if proposals is None:
        logger.info("No JSON task array in model output, using line extraction")
        proposals = extract_lines(raw_text, context_hint or "")

    proposals = normalize_due_dates(proposals, today)
    day = _today(today)
    return [p for p in proposals if _is_future(p, day)]
