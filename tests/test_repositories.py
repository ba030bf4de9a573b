"""Tests for the SQL issued by the blog, user and auth repositories."""

from unittest.mock import AsyncMock

import asyncpg
import pytest

from auth import repository as auth_repository
from blogs import repository as blog_repository
from core import db
from core.errors import AppError
from users import repository as user_repository


@pytest.fixture
def fetch_one(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    mock = AsyncMock(return_value={"id": 11})
    monkeypatch.setattr(db, "fetch_one", mock)
    return mock


@pytest.fixture
def fetch_all(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    mock = AsyncMock(return_value=[])
    monkeypatch.setattr(db, "fetch_all", mock)
    return mock


@pytest.fixture
def execute(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    mock = AsyncMock(return_value="UPDATE 1")
    monkeypatch.setattr(db, "execute", mock)
    return mock


class TestBlogRepository:
    @pytest.mark.asyncio
    async def test_list_blogs_is_unconditional(self, fetch_all: AsyncMock) -> None:
        await blog_repository.list_blogs()
        sql = fetch_all.await_args.args[0]
        assert "FROM blogs" in sql
        assert "WHERE" not in sql

    @pytest.mark.asyncio
    async def test_list_blogs_by_user_binds_owner(self, fetch_all: AsyncMock) -> None:
        await blog_repository.list_blogs_by_user(7)
        sql, user_id = fetch_all.await_args.args
        assert "WHERE user_id = $1" in sql
        assert user_id == 7

    @pytest.mark.asyncio
    async def test_get_blog_binds_id(self, fetch_one: AsyncMock) -> None:
        await blog_repository.get_blog_by_id(5)
        sql, blog_id = fetch_one.await_args.args
        assert "WHERE id = $1" in sql
        assert blog_id == 5

    @pytest.mark.asyncio
    async def test_create_blog_returns_generated_id(self, fetch_one: AsyncMock) -> None:
        blog_id = await blog_repository.create_blog("T", "D", 7)
        assert blog_id == 11
        sql, *args = fetch_one.await_args.args
        assert "RETURNING id" in sql
        assert args == ["T", "D", 7]

    @pytest.mark.asyncio
    async def test_create_blog_without_row(self, fetch_one: AsyncMock) -> None:
        fetch_one.return_value = None
        with pytest.raises(RuntimeError):
            await blog_repository.create_blog("T", "D", 7)

    @pytest.mark.asyncio
    async def test_update_blog_binds_values(self, execute: AsyncMock) -> None:
        hostile = "x', user_id = 1 --"
        changed = await blog_repository.update_blog({"title": hostile}, 5)
        assert changed == 1
        sql, *args = execute.await_args.args
        assert hostile not in sql
        assert "title = $1" in sql
        assert "WHERE id = $2" in sql
        assert "title IS DISTINCT FROM $1" in sql
        assert args == [hostile, 5]

    @pytest.mark.asyncio
    async def test_update_blog_two_fields(self, execute: AsyncMock) -> None:
        await blog_repository.update_blog({"title": "T", "description": "D"}, 9)
        sql, *args = execute.await_args.args
        assert "WHERE id = $3" in sql
        assert args == ["T", "D", 9]

    @pytest.mark.asyncio
    async def test_update_blog_zero_rows(self, execute: AsyncMock) -> None:
        execute.return_value = "UPDATE 0"
        assert await blog_repository.update_blog({"title": "T"}, 5) == 0

    @pytest.mark.asyncio
    async def test_update_blog_rejects_owner_column(self, execute: AsyncMock) -> None:
        with pytest.raises(ValueError):
            await blog_repository.update_blog({"user_id": 8}, 5)
        execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_blog(self, execute: AsyncMock) -> None:
        execute.return_value = "DELETE 1"
        assert await blog_repository.delete_blog(5) == 1
        sql, blog_id = execute.await_args.args
        assert "DELETE FROM blogs" in sql
        assert blog_id == 5


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_update_user_binds_values(self, execute: AsyncMock) -> None:
        await user_repository.update_user({"username": "carol"}, 7)
        sql, *args = execute.await_args.args
        assert "UPDATE users" in sql
        assert "username = $1" in sql
        assert args == ["carol", 7]

    @pytest.mark.asyncio
    async def test_update_user_rejects_password_hash(self, execute: AsyncMock) -> None:
        with pytest.raises(ValueError):
            await user_repository.update_user({"password_hash": "x"}, 7)
        execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_user_conflict(self, execute: AsyncMock) -> None:
        execute.side_effect = asyncpg.UniqueViolationError("duplicate key")
        with pytest.raises(AppError) as exc_info:
            await user_repository.update_user({"username": "bob"}, 7)
        assert exc_info.value.status_code == 409


class TestAuthRepository:
    @pytest.mark.asyncio
    async def test_find_user_by_id(self, fetch_one: AsyncMock) -> None:
        await auth_repository.find_user_by_attribute("id", 7)
        sql, value = fetch_one.await_args.args
        assert "WHERE id = $1" in sql
        assert value == 7

    @pytest.mark.asyncio
    async def test_find_user_normalizes_email(self, fetch_one: AsyncMock) -> None:
        await auth_repository.find_user_by_attribute("email", " Alice@Example.COM ")
        assert fetch_one.await_args.args[1] == "alice@example.com"

    @pytest.mark.asyncio
    async def test_find_user_rejects_unknown_attribute(self, fetch_one: AsyncMock) -> None:
        with pytest.raises(ValueError):
            await auth_repository.find_user_by_attribute("password_hash", "x")
        fetch_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user_conflict(self, fetch_one: AsyncMock) -> None:
        fetch_one.side_effect = asyncpg.UniqueViolationError("duplicate key")
        with pytest.raises(AppError) as exc_info:
            await auth_repository.create_user(username="alice", password_hash="h")
        assert exc_info.value.status_code == 409
