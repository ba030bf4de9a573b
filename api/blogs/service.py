"""
Blog business logic.

Every operation receives the caller's id explicitly and answers with an
`ApiResponse` envelope. Failures below this layer are turned into envelopes by
`service_boundary`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import status

from core.constants import BLOG_CREATION_REQUIRED_FIELDS, BLOG_UPDATE_FIELDS
from core.responses import ApiResponse, send_response, service_boundary
from core.validation import is_available, pick_fields

from . import repository

logger = logging.getLogger(__name__)


def _not_found(blog_id: int) -> ApiResponse:
    return send_response(status.HTTP_404_NOT_FOUND, f"Blog with id {blog_id} not found")


def _not_authorized() -> ApiResponse:
    return send_response(status.HTTP_401_UNAUTHORIZED, "You are not authorized")


def _is_owner(blog: Mapping[str, Any], current_user_id: int) -> bool:
    return int(blog["user_id"]) == int(current_user_id)


@service_boundary
async def list_blogs() -> ApiResponse:
    blogs = await repository.list_blogs()
    return send_response(status.HTTP_200_OK, "All blogs fetched successfully", blogs)


@service_boundary
async def list_user_blogs(user_id: int) -> ApiResponse:
    blogs = await repository.list_blogs_by_user(user_id)
    return send_response(status.HTTP_200_OK, f"Blogs for user with id {user_id} fetched successfully", blogs)


@service_boundary
async def create_blog(body: Mapping[str, Any] | None, *, current_user_id: int) -> ApiResponse:
    if not is_available(body, BLOG_CREATION_REQUIRED_FIELDS):
        return send_response(status.HTTP_400_BAD_REQUEST, "Some fields are missing")

    fields = pick_fields(body, BLOG_CREATION_REQUIRED_FIELDS)
    title, description = fields["title"], fields["description"]

    blog_id = await repository.create_blog(title, description, current_user_id)
    logger.info("blog_created blog_id=%s user_id=%s", blog_id, current_user_id)

    return send_response(
        status.HTTP_201_CREATED,
        "Blog created successfully",
        {
            "id": blog_id,
            "title": title,
            "description": description,
            "user_id": current_user_id,
        },
    )


@service_boundary
async def get_blog(blog_id: int) -> ApiResponse:
    blog = await repository.get_blog_by_id(blog_id)
    if blog is None:
        return _not_found(blog_id)
    return send_response(status.HTTP_200_OK, f"Blog with id {blog_id} fetched successfully", blog)


@service_boundary
async def update_blog(blog_id: int, body: Mapping[str, Any] | None, *, current_user_id: int) -> ApiResponse:
    if not is_available(body, BLOG_UPDATE_FIELDS, all_required=False):
        return send_response(status.HTTP_400_BAD_REQUEST, "Fields to be updated does not exist")

    blog = await repository.get_blog_by_id(blog_id)
    if blog is None:
        return _not_found(blog_id)

    if not _is_owner(blog, current_user_id):
        logger.warning("blog_update_rejected blog_id=%s user_id=%s", blog_id, current_user_id)
        return _not_authorized()

    updated = await repository.update_blog(pick_fields(body, BLOG_UPDATE_FIELDS), blog_id)
    if updated:
        logger.info("blog_updated blog_id=%s user_id=%s", blog_id, current_user_id)
        return send_response(status.HTTP_200_OK, f"Blog with id {blog_id} updated successfully")
    return send_response(status.HTTP_400_BAD_REQUEST, f"Blog with id {blog_id} could not be updated")


@service_boundary
async def delete_blog(blog_id: int, *, current_user_id: int) -> ApiResponse:
    blog = await repository.get_blog_by_id(blog_id)
    if blog is None:
        return _not_found(blog_id)

    if not _is_owner(blog, current_user_id):
        logger.warning("blog_delete_rejected blog_id=%s user_id=%s", blog_id, current_user_id)
        return _not_authorized()

    deleted = await repository.delete_blog(blog_id)
    if deleted:
        logger.info("blog_deleted blog_id=%s user_id=%s", blog_id, current_user_id)
        return send_response(status.HTTP_200_OK, f"Blog with id {blog_id} deleted successfully")
    return send_response(status.HTTP_400_BAD_REQUEST, f"Blog with id {blog_id} could not be deleted")
