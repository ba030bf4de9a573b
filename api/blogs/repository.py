"""
Blog persistence (raw SQL).

One function per statement, each a single round trip through the shared pool.
"""

from __future__ import annotations

from typing import Any

from core import db
from core.constants import BLOG_UPDATE_FIELDS

_BLOG_COLUMNS = "id, title, description, user_id, created_at, updated_at"


async def list_blogs() -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_BLOG_COLUMNS}
        FROM blogs
        ORDER BY id
        """
    )


async def list_blogs_by_user(user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_BLOG_COLUMNS}
        FROM blogs
        WHERE user_id = $1
        ORDER BY id
        """,
        user_id,
    )


async def get_blog_by_id(blog_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_BLOG_COLUMNS}
        FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )


async def create_blog(title: str, description: str, user_id: int) -> int:
    """
    Insert one blog and return its generated id.
    """
    row = await db.fetch_one(
        """
        INSERT INTO blogs (title, description, user_id)
        VALUES ($1, $2, $3)
        RETURNING id
        """,
        title,
        description,
        user_id,
    )
    if row is None:
        raise RuntimeError("Failed to create blog.")
    return int(row["id"])


async def update_blog(fields: dict[str, Any], blog_id: int) -> int:
    """
    Apply a partial update and return the number of rows actually changed.

    Only BLOG_UPDATE_FIELDS may appear in `fields`; values are bound.
    A row whose values already match is not counted.
    """
    set_sql, changed_sql, args = db.build_set_clause(fields, allowed=BLOG_UPDATE_FIELDS)
    id_placeholder = f"${len(args) + 1}"
    status = await db.execute(
        f"""
        UPDATE blogs
        SET {set_sql}, updated_at = now()
        WHERE id = {id_placeholder}
          AND ({changed_sql})
        """,
        *args,
        blog_id,
    )
    return db.affected_rows(status)


async def delete_blog(blog_id: int) -> int:
    status = await db.execute(
        """
        DELETE FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )
    return db.affected_rows(status)
