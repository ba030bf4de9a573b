"""
User profile API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from blogs import service as blog_service
from core.constants import ID_MAX, ID_MIN
from core.responses import to_json_response

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("/{user_id}")
async def get_user(
    user_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    current_user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    return to_json_response(await service.get_user(user_id, current_user_id=current_user_id))


@router.patch("/{user_id}")
async def update_user(
    user_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    payload: schemas.UserUpdateRequest | None = None,
    current_user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    body = payload.model_dump(exclude_unset=True) if payload is not None else {}
    result = await service.update_user(user_id, body, current_user_id=current_user_id)
    return to_json_response(result)


@router.get("/{user_id}/blogs")
async def list_user_blogs(
    user_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    _: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    return to_json_response(await blog_service.list_user_blogs(user_id))
