"""
Blog API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core.constants import ID_MAX, ID_MIN
from core.responses import to_json_response

from . import schemas, service

router = APIRouter(prefix="/blogs")


def _body(payload: schemas.BlogCreateRequest | None) -> dict:
    return payload.model_dump(exclude_unset=True) if payload is not None else {}


@router.get("")
async def list_blogs(
    _: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    return to_json_response(await service.list_blogs())


@router.post("")
async def create_blog(
    payload: schemas.BlogCreateRequest | None = None,
    current_user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    result = await service.create_blog(
        _body(payload),
        current_user_id=current_user_id,
    )
    return to_json_response(result)


@router.get("/{blog_id}")
async def get_blog(
    blog_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    _: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    return to_json_response(await service.get_blog(blog_id))


@router.patch("/{blog_id}")
async def update_blog(
    blog_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    payload: schemas.BlogUpdateRequest | None = None,
    current_user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    result = await service.update_blog(
        blog_id,
        _body(payload),
        current_user_id=current_user_id,
    )
    return to_json_response(result)


@router.delete("/{blog_id}")
async def delete_blog(
    blog_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    current_user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    return to_json_response(await service.delete_blog(blog_id, current_user_id=current_user_id))
