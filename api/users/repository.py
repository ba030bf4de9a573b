"""
User profile persistence (raw SQL).

Lookups go through `auth.repository.find_user_by_attribute`; this module only
holds the profile write.
"""

from __future__ import annotations

from typing import Any

import asyncpg
from fastapi import status

from core import db
from core.constants import USER_UPDATE_FIELDS
from core.errors import AppError


async def update_user(fields: dict[str, Any], user_id: int) -> int:
    """
    Apply a partial profile update and return the number of rows changed.

    Only USER_UPDATE_FIELDS may appear in `fields`; values are bound.
    """
    set_sql, changed_sql, args = db.build_set_clause(fields, allowed=USER_UPDATE_FIELDS)
    id_placeholder = f"${len(args) + 1}"
    try:
        status_tag = await db.execute(
            f"""
            UPDATE users
            SET {set_sql}, updated_at = now()
            WHERE id = {id_placeholder}
              AND ({changed_sql})
            """,
            *args,
            user_id,
        )
    except asyncpg.UniqueViolationError as exc:
        raise AppError("Username or email is already taken.", status.HTTP_409_CONFLICT) from exc
    return db.affected_rows(status_tag)
