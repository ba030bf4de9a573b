"""
Pydantic schemas for blog endpoints.

Request fields are optional on purpose: presence is checked by the service so
a missing field is answered with the regular 400 envelope. Unknown keys
(including any owner id) are dropped.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BlogCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)


class BlogUpdateRequest(BlogCreateRequest):
    """
    Same fields as creation; any subset may be sent.
    """
