"""
Auth persistence helpers.
"""

from __future__ import annotations

from typing import Any

import asyncpg
from fastapi import status

from core import db
from core.errors import AppError

# Columns that may be used as a lookup key. The value is always bound.
LOOKUP_ATTRIBUTES: tuple[str, ...] = ("id", "username", "email")


def normalize_username(username: str) -> str:
    return (username or "").strip()


def normalize_email(email: str | None) -> str | None:
    value = (email or "").strip().lower()
    return value or None


async def create_user(*, username: str, password_hash: str, email: str | None = None) -> dict:
    try:
        row = await db.fetch_one(
            """
            INSERT INTO users (username, email, password_hash)
            VALUES ($1, $2, $3)
            RETURNING id, username, email, created_at, updated_at
            """,
            normalize_username(username),
            normalize_email(email),
            password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise AppError("Username or email is already registered.", status.HTTP_409_CONFLICT) from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def find_user_by_attribute(attribute: str, value: Any) -> dict | None:
    """
    Fetch one user row by `attribute` (one of LOOKUP_ATTRIBUTES).
    """
    if attribute not in LOOKUP_ATTRIBUTES:
        raise ValueError(f"Unsupported user lookup attribute: {attribute}")
    if attribute == "username":
        value = normalize_username(value)
    elif attribute == "email":
        value = normalize_email(value)
    return await db.fetch_one(
        f"""
        SELECT id, username, email, password_hash, created_at, updated_at
        FROM users
        WHERE {attribute} = $1
        """,
        value,
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await find_user_by_attribute("id", user_id)


async def get_user_by_username(username: str) -> dict | None:
    return await find_user_by_attribute("username", username)
