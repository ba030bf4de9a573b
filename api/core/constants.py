"""
Field allow-lists shared by the blog and user features.
"""

from __future__ import annotations

BLOG_CREATION_REQUIRED_FIELDS: tuple[str, ...] = ("title", "description")

BLOG_UPDATE_FIELDS: tuple[str, ...] = ("title", "description")

USER_UPDATE_FIELDS: tuple[str, ...] = ("username", "email")

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 64

# bcrypt only hashes the first 72 bytes and newer releases reject longer input.
PASSWORD_MAX_BYTES = 72

# Postgres BIGINT range; ids are generated by BIGSERIAL.
ID_MIN = 1
ID_MAX = 2**63 - 1
