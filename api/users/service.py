"""
User profile business logic.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import status

from auth import repository as auth_repository
from core.constants import USER_UPDATE_FIELDS, USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from core.responses import ApiResponse, send_response, service_boundary
from core.validation import is_available, pick_fields

from . import repository

logger = logging.getLogger(__name__)


def _not_found(user_id: int) -> ApiResponse:
    return send_response(status.HTTP_404_NOT_FOUND, f"User with id {user_id} does not exist")


def _not_authorized() -> ApiResponse:
    return send_response(status.HTTP_401_UNAUTHORIZED, "You are not authorized")


@service_boundary
async def get_user(user_id: int, *, current_user_id: int) -> ApiResponse:
    user = await auth_repository.find_user_by_attribute("id", user_id)
    if user is None:
        return _not_found(user_id)

    if int(user["id"]) != int(current_user_id):
        logger.warning("user_read_rejected user_id=%s caller_id=%s", user_id, current_user_id)
        return _not_authorized()

    return send_response(
        status.HTTP_200_OK,
        f"User with id {user_id} fetched successfully",
        {"id": int(user["id"]), "username": str(user["username"])},
    )


@service_boundary
async def update_user(user_id: int, body: Mapping[str, Any] | None, *, current_user_id: int) -> ApiResponse:
    if not is_available(body, USER_UPDATE_FIELDS, all_required=False):
        return send_response(status.HTTP_400_BAD_REQUEST, "Fields to be updated does not exist")

    user = await auth_repository.find_user_by_attribute("id", user_id)
    if user is None:
        return _not_found(user_id)

    if int(user["id"]) != int(current_user_id):
        logger.warning("user_update_rejected user_id=%s caller_id=%s", user_id, current_user_id)
        return _not_authorized()

    fields = pick_fields(body, USER_UPDATE_FIELDS)
    username = fields.get("username")
    if username is not None and not USERNAME_MIN_LENGTH <= len(str(username)) <= USERNAME_MAX_LENGTH:
        return send_response(
            status.HTTP_400_BAD_REQUEST,
            f"Username must be {USERNAME_MIN_LENGTH} to {USERNAME_MAX_LENGTH} characters",
        )
    if "email" in fields:
        fields["email"] = auth_repository.normalize_email(fields["email"])

    updated = await repository.update_user(fields, user_id)
    if updated:
        logger.info("user_updated user_id=%s fields=%s", user_id, ",".join(fields))
        return send_response(status.HTTP_200_OK, f"User with id {user_id} updated successfully")
    return send_response(status.HTTP_400_BAD_REQUEST, f"User with id {user_id} could not be updated")
