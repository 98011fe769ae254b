"""
Stockroom Backend — Category Route Handlers
=============================================

Header per route (value configured in settings):
    GET    /api/categories        header-get-category     (get_category_key)
    GET    /api/categories/{id}   header-get-category     (get_category_key)
    POST   /api/categories        header-add-category     (add_category_key)
    PUT    /api/categories/{id}   header-update-category  (update_category_key)
    DELETE /api/categories/{id}   header-delete-category  (delete_category_key)
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.database import get_db_session
from stockroom.schemas.category import CategoryEnvelope, CategoryResponse, CategoryWrite
from stockroom.schemas.common import ErrorResponse, MessageResponse
from stockroom.security import require_api_key
from stockroom.services.category_service import category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])

_read_key = require_api_key("header-get-category", "get_category_key")

_errors = {
    401: {"description": "Missing or invalid API key", "model": ErrorResponse},
    404: {"description": "Category or acting user not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[CategoryResponse],
    responses=_errors,
    summary="List all categories",
    dependencies=[Depends(_read_key)],
)
async def list_categories(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    categories = await category_service.list_categories(db)
    response.headers["X-Total-Count"] = str(len(categories))
    return categories


@router.get(
    "/{category_id}",
    response_model=CategoryEnvelope,
    responses=_errors,
    summary="Get a single category by ID",
    dependencies=[Depends(_read_key)],
)
async def get_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryEnvelope:
    return CategoryEnvelope(data=await category_service.get_category(db, category_id))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_errors,
        400: {"description": "Missing name or last_op_id", "model": ErrorResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
    },
    summary="Create a category",
    dependencies=[Depends(require_api_key("header-add-category", "add_category_key"))],
)
async def create_category(
    payload: CategoryWrite,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.create_category(db, payload)


@router.put(
    "/{category_id}",
    response_model=List[CategoryResponse],
    responses={
        **_errors,
        400: {"description": "Missing name or last_op_id", "model": ErrorResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
    },
    summary="Rename a category",
    description="Renames the category and returns the full list of categories.",
    dependencies=[Depends(require_api_key("header-update-category", "update_category_key"))],
)
async def update_category(
    category_id: UUID,
    payload: CategoryWrite,
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await category_service.update_category(db, category_id, payload)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    responses={
        **_errors,
        409: {"description": "Category still has products", "model": ErrorResponse},
    },
    summary="Delete a category",
    dependencies=[Depends(require_api_key("header-delete-category", "delete_category_key"))],
)
async def delete_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.delete_category(db, category_id)
    return MessageResponse(message="Category deleted successfully")
