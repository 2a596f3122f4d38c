from __future__ import annotations
import json
from datetime import date, timedelta
from llm.providers.base import LLMProvider

class MockProvider(LLMProvider):
    name = "mock"

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        """
        Returns canned responses keyed off the prompt wording, for offline development.
        """
        tomorrow = (date.today() + timedelta(days=1)).isoformat()

        if "intelligently create the appropriate number of tasks" in user:
            return json.dumps([
                {
                    "title": "Draft the plan",
                    "description": "Write down the goal and the first concrete steps",
                    "priority": "high",
                    "category": "Personal",
                    "dueDate": tomorrow,
                    "estimatedTime": 45,
                    "tags": ["planning", "focus"],
                    "subtasks": ["List the goals", "Pick a deadline", "Block time in calendar"],
                }
            ])

        if "Break down this task" in user:
            return json.dumps({
                "subtasks": ["Gather materials", "Do the work", "Review the result"],
                "estimatedTime": 60,
                "priority": "medium",
                "category": "General",
                "tags": ["breakdown"],
            })

        if "Review and improve this task" in user:
            return json.dumps({
                "improvedTitle": "Finish the task with a clear outcome",
                "improvedDescription": "Define what done looks like and complete it.",
                "suggestions": ["Add a deadline", "Split into steps", "Define success criteria"],
            })

        # recommendations and anything else: plain lines
        return "Block 30 minutes for it\nPrepare what you need beforehand\nReview progress at the end of the day"
