from __future__ import annotations

import builtins
import dataclasses
from datetime import datetime, timezone
from typing import Any, Iterable

import psycopg2.errors
import pytest

from models.user import User
from services.user_service import UserService


class FakeCursor:
    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self.rowcount = -1

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *_exc) -> None:
        pass

    def execute(self, sql: str, params: Any = None) -> None:
        self._conn.executed.append((sql, params))
        if self._conn.error is not None:
            raise self._conn.error
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)


class FakeConnection:
    """Records statements and commit/rollback calls made by a repository."""

    def __init__(self) -> None:
        self.executed: list[tuple[str, Any]] = []
        self.rows: list[tuple] = []
        self.rowcount = 0
        self.error: Exception | None = None
        self.commits = 0
        self.rollbacks = 0
        self.released = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def fake_conn(monkeypatch) -> FakeConnection:
    from repositories import user_repo as user_repo_module

    conn = FakeConnection()

    def _release(released) -> None:
        assert released is conn
        conn.released += 1

    monkeypatch.setattr(user_repo_module, "get_connection", lambda: conn)
    monkeypatch.setattr(user_repo_module, "release_connection", _release)
    return conn


class InMemoryUserRepository:
    """Stand-in for UserRepository that enforces the unique email index."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._next_id = 1

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return any(
            u.email == email and u.id != exclude_id for u in self._users.values()
        )

    def add(self, user: User) -> User:
        if self._email_taken(user.email):
            raise psycopg2.errors.UniqueViolation(
                'duplicate key value violates unique constraint "ux_users_email"'
            )
        user.id = self._next_id
        user.created_at = datetime.now(timezone.utc)
        self._next_id += 1
        self._users[user.id] = dataclasses.replace(user)
        return user

    def get_all(self) -> list[User]:
        return [dataclasses.replace(self._users[k]) for k in sorted(self._users)]

    def get_by_id(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return dataclasses.replace(user) if user else None

    def update(self, user_id: int, changes: dict[str, Any]) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        if "email" in changes and self._email_taken(changes["email"], exclude_id=user_id):
            raise psycopg2.errors.UniqueViolation(
                'duplicate key value violates unique constraint "ux_users_email"'
            )
        self._users[user_id] = dataclasses.replace(user, **changes)
        return True

    def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None


@pytest.fixture()
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def service(repo: InMemoryUserRepository) -> UserService:
    return UserService(repo)


@pytest.fixture()
def feed_input(monkeypatch):
    """Script the answers returned by ``input()``; EOFError once exhausted."""

    prompts: list[str] = []

    def _feed(answers: Iterable[str]) -> list[str]:
        remaining = iter(answers)

        def _fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", _fake_input)
        return prompts

    return _feed
