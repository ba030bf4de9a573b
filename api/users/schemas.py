"""
Pydantic schemas for user profile endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH


class UserUpdateRequest(BaseModel):
    # Anything else (id, password_hash, ...) is dropped.
    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: str | None = Field(default=None, max_length=320)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value
