from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from llm.llm_client import LLMClient

FIXED_NOW = datetime(2024, 6, 1, 10, 0)


class FakeProvider:
    name = "fake"

    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def generate(self, *, system: str, user: str) -> str:
        self.prompts.append(user)
        return self._response_text


class FailingProvider:
    name = "failing"

    def __init__(self, exc: Exception):
        self._exc = exc

    def generate(self, *, system: str, user: str) -> str:
        raise self._exc


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def app_env(tmp_path):
    """App wired to temp-file stores, a fixed clock and a swappable LLM provider."""
    from api import dependencies
    from api.main import app
    from extraction.task_generator import TaskGenerator
    from storage.task_store import TaskStore
    from storage.user_store import UserStore

    env = {
        "tasks": TaskStore(path=str(tmp_path / "tasks.json")),
        "users": UserStore(path=str(tmp_path / "users.json")),
        "provider": FakeProvider("[]"),
    }

    app.dependency_overrides[dependencies.get_task_store] = lambda: env["tasks"]
    app.dependency_overrides[dependencies.get_user_store] = lambda: env["users"]
    app.dependency_overrides[dependencies.get_now] = lambda: FIXED_NOW
    app.dependency_overrides[dependencies.get_task_generator] = lambda: TaskGenerator(
        llm_client=LLMClient(provider=env["provider"])
    )
    env["client"] = TestClient(app)
    yield env
    app.dependency_overrides.clear()


def register(client, email="ana@example.com", password="secret", name="Ana") -> dict:
    r = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(app_env):
    return register(app_env["client"])
