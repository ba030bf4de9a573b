"""Shared fixtures: an in-memory stand-in for the blogs/users tables and an API client."""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from auth import dependencies as auth_dependencies
from auth import repository as auth_repository
from blogs import repository as blog_repository
from core import db
from core.constants import BLOG_UPDATE_FIELDS, USER_UPDATE_FIELDS
from main import app
from users import repository as user_repository


class FakeStore:
    """Rows keyed by id, with the same call surface as the repositories."""

    def __init__(self) -> None:
        self.blogs: dict[int, dict[str, Any]] = {}
        self.users: dict[int, dict[str, Any]] = {}
        self.writes: list[tuple[str, Any]] = []
        self._next_blog_id = 1

    def add_user(self, user_id: int, username: str, email: str | None = None) -> dict[str, Any]:
        now = datetime.now(timezone.utc)
        row = {
            "id": user_id,
            "username": username,
            "email": email,
            "password_hash": "$2b$12$notarealhash",
            "created_at": now,
            "updated_at": now,
        }
        self.users[user_id] = row
        return row

    def add_blog(self, title: str, description: str, user_id: int) -> dict[str, Any]:
        blog_id = self._next_blog_id
        self._next_blog_id += 1
        now = datetime.now(timezone.utc)
        row = {
            "id": blog_id,
            "title": title,
            "description": description,
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        self.blogs[blog_id] = row
        return row

    # blogs.repository

    async def list_blogs(self) -> list[dict[str, Any]]:
        return [dict(row) for _, row in sorted(self.blogs.items())]

    async def list_blogs_by_user(self, user_id: int) -> list[dict[str, Any]]:
        return [dict(row) for _, row in sorted(self.blogs.items()) if row["user_id"] == user_id]

    async def get_blog_by_id(self, blog_id: int) -> dict[str, Any] | None:
        row = self.blogs.get(blog_id)
        return dict(row) if row is not None else None

    async def create_blog(self, title: str, description: str, user_id: int) -> int:
        self.writes.append(("create_blog", (title, description, user_id)))
        return int(self.add_blog(title, description, user_id)["id"])

    async def update_blog(self, fields: dict[str, Any], blog_id: int) -> int:
        db.build_set_clause(fields, allowed=BLOG_UPDATE_FIELDS)
        self.writes.append(("update_blog", (dict(fields), blog_id)))
        return self._apply(self.blogs.get(blog_id), fields)

    async def delete_blog(self, blog_id: int) -> int:
        self.writes.append(("delete_blog", blog_id))
        return 1 if self.blogs.pop(blog_id, None) is not None else 0

    # auth.repository / users.repository

    async def find_user_by_attribute(self, attribute: str, value: Any) -> dict[str, Any] | None:
        for row in self.users.values():
            if row.get(attribute) == value:
                return dict(row)
        return None

    async def update_user(self, fields: dict[str, Any], user_id: int) -> int:
        db.build_set_clause(fields, allowed=USER_UPDATE_FIELDS)
        self.writes.append(("update_user", (dict(fields), user_id)))
        return self._apply(self.users.get(user_id), fields)

    @staticmethod
    def _apply(row: dict[str, Any] | None, fields: dict[str, Any]) -> int:
        if row is None:
            return 0
        if all(row.get(name) == value for name, value in fields.items()):
            return 0
        row.update(fields)
        return 1


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    """Route every repository call to an in-memory store."""
    fake = FakeStore()
    for name in (
        "list_blogs",
        "list_blogs_by_user",
        "get_blog_by_id",
        "create_blog",
        "update_blog",
        "delete_blog",
    ):
        monkeypatch.setattr(blog_repository, name, getattr(fake, name))
    monkeypatch.setattr(auth_repository, "find_user_by_attribute", fake.find_user_by_attribute)
    monkeypatch.setattr(user_repository, "update_user", fake.update_user)
    fake.add_user(7, "alice", "alice@example.com")
    fake.add_user(8, "bob")
    return fake


class Caller:
    """Mutable identity used by the dependency override."""

    def __init__(self, user_id: int = 7) -> None:
        self.user_id = user_id


@pytest.fixture
def caller() -> Caller:
    return Caller()


@pytest.fixture
async def client(store: FakeStore, caller: Caller) -> AsyncGenerator[AsyncClient, None]:
    """API client authenticated as `caller.user_id`."""

    async def current_user_id() -> int:
        return caller.user_id

    app.dependency_overrides[auth_dependencies.get_current_user_id] = current_user_id
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as async_client:
        yield async_client
    app.dependency_overrides.clear()
