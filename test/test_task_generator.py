from datetime import date

import pytest

from extraction.task_generator import TaskGenerator
from llm.errors import LLMProviderError
from llm.llm_client import LLMClient
from llm.providers.mock_provider import MockProvider
from conftest import FailingProvider

TODAY = date(2024, 6, 1)


def _generator(provider):
    return TaskGenerator(llm_client=LLMClient(provider=provider))


def test_generate_tasks_prompt_mentions_dates(fake_provider_factory):
    provider = fake_provider_factory('[{"title":"Book dentist","priority":"high"}]')
    tasks = _generator(provider).generate_tasks("book dentist", today=TODAY)

    assert [t.title for t in tasks] == ["Book dentist"]
    assert tasks[0].due_date == date(2024, 6, 2)
    prompt = provider.prompts[0]
    assert '"book dentist"' in prompt
    assert "2024-06-01" in prompt
    assert "2024-06-02" in prompt


def test_generate_tasks_garbage_output_uses_lines(fake_provider_factory):
    provider = fake_provider_factory("THIS IS NOT JSON AT ALL")
    tasks = _generator(provider).generate_tasks("random text", today=TODAY)
    assert len(tasks) == 1
    assert tasks[0].title == "THIS IS NOT JSON AT ALL"


def test_generate_tasks_propagates_provider_failure():
    generator = _generator(FailingProvider(LLMProviderError("down")))
    with pytest.raises(LLMProviderError):
        generator.generate_tasks("anything", today=TODAY)


def test_recommendations_are_trimmed_to_three(fake_provider_factory):
    provider = fake_provider_factory("\n  First  \n\nSecond\nThird\nFourth\n")
    out = _generator(provider).recommend("Write report", ["Email boss", "Book room"])
    assert out == ["First", "Second", "Third"]
    assert "Email boss, Book room" in provider.prompts[0]


def test_breakdown_parses_json_object(fake_provider_factory):
    provider = fake_provider_factory(
        'Plan: {"subtasks": ["Outline", "Draft"], "estimatedTime": 90, '
        '"priority": "high", "category": "Work", "tags": ["writing"]}'
    )
    out = _generator(provider).breakdown("Write report", "quarterly")
    assert out.subtasks == ["Outline", "Draft"]
    assert out.estimated_time == 90
    assert out.priority == "high"
    assert out.category == "Work"
    assert out.tags == ["writing"]


def test_breakdown_falls_back_on_garbage(fake_provider_factory):
    out = _generator(fake_provider_factory("no idea")).breakdown("Write report")
    assert out.subtasks == ["Break down: Write report"]
    assert out.estimated_time == 60
    assert out.priority == "medium"
    assert out.tags == ["breakdown"]


def test_breakdown_falls_back_on_invalid_values(fake_provider_factory):
    out = _generator(fake_provider_factory('{"estimatedTime": "lots"}')).breakdown("X")
    assert out.subtasks == ["Break down: X"]


def test_breakdown_treats_string_subtasks_as_one_step(fake_provider_factory):
    out = _generator(fake_provider_factory('{"subtasks": "step one", "tags": "quick"}')).breakdown("X")
    assert out.subtasks == ["step one"]
    assert out.tags == ["quick"]


def test_improve_parses_json_object(fake_provider_factory):
    provider = fake_provider_factory(
        '{"improvedTitle": "Call Dr. Lee to book cleaning", '
        '"improvedDescription": "Book for next week", "suggestions": ["Set reminder"]}'
    )
    out = _generator(provider).improve("call dentist", "")
    assert out.improved_title == "Call Dr. Lee to book cleaning"
    assert out.improved_description == "Book for next week"
    assert out.suggestions == ["Set reminder"]


def test_improve_falls_back_to_original(fake_provider_factory):
    out = _generator(fake_provider_factory("")).improve("call dentist", "teeth")
    assert out.improved_title == "call dentist"
    assert out.improved_description == "teeth"
    assert len(out.suggestions) == 3


def test_mock_provider_round_trip():
    generator = _generator(MockProvider())
    tasks = generator.generate_tasks("plan my week", today=date.today())
    assert tasks and all(t.due_date > date.today() for t in tasks)
    assert generator.breakdown("Clean garage").subtasks
    assert generator.improve("Clean garage").improved_title
    assert len(generator.recommend("Clean garage", [])) == 3
