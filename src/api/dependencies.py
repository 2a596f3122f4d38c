import os
from datetime import datetime
from functools import lru_cache

from extraction.task_generator import TaskGenerator
from storage.task_store import TaskStore
from storage.user_store import UserStore

# Configuration
TASKS_DB_PATH = os.getenv("TASKS_DB_PATH", "data/tasks.json")
USERS_DB_PATH = os.getenv("USERS_DB_PATH", "data/users.json")


@lru_cache
def get_task_store() -> TaskStore:
    return TaskStore(path=TASKS_DB_PATH)


@lru_cache
def get_user_store() -> UserStore:
    return UserStore(path=USERS_DB_PATH)


def get_task_generator() -> TaskGenerator:
    return TaskGenerator()


def get_now() -> datetime:
    """Reference clock for due-date classification and generation."""
    return datetime.now()
