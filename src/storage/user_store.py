from __future__ import annotations

from typing import Optional

from storage.json_store import JsonDocumentStore
from taskmind.models import User


class UserExistsError(ValueError):
    pass


class UserStore(JsonDocumentStore):
    def __init__(self, path: str = "data/users.json"):
        super().__init__(path)

    def get(self, user_id: str) -> Optional[User]:
        with self._lock:
            doc = self._read().get(user_id)
        return User.model_validate(doc) if doc else None

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        with self._lock:
            docs = self._read()
        for doc in docs.values():
            if doc.get("email") == email:
                return User.model_validate(doc)
        return None

    def create(self, email: str, name: str, password_hash: str) -> User:
        user = User(email=email.strip().lower(), name=name.strip(), password_hash=password_hash)
        with self._lock:
            docs = self._read()
            if any(d.get("email") == user.email for d in docs.values()):
                raise UserExistsError(user.email)
            docs[user.id] = user.model_dump(mode="json")
            self._write(docs)
        return user
