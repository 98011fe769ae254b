"""
Stockroom Backend — Product Route Handlers
============================================

Header per route (value configured in settings):
    GET    /api/products        header-get-products    (get_products_key)
    GET    /api/products/{id}   header-get-products    (get_products_key)
    POST   /api/products        header-add-product     (add_product_key)
    PUT    /api/products/{id}   header-update-product  (update_product_key)
    DELETE /api/products/{id}   header-delete-product  (delete_product_key)
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.database import get_db_session
from stockroom.schemas.common import ErrorResponse, MessageResponse
from stockroom.schemas.product import (
    ProductCreate,
    ProductEnvelope,
    ProductResponse,
    ProductUpdate,
)
from stockroom.security import require_api_key
from stockroom.services.product_service import product_service

router = APIRouter(prefix="/api/products", tags=["Products"])

_read_key = require_api_key("header-get-products", "get_products_key")

_errors = {
    401: {"description": "Missing or invalid API key", "model": ErrorResponse},
    404: {"description": "Product, category or acting user not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[ProductResponse],
    responses=_errors,
    summary="List products",
    dependencies=[Depends(_read_key)],
)
async def list_products(
    response: Response,
    category_id: Optional[UUID] = Query(
        default=None,
        description="Only return products in this category",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    products = await product_service.list_products(db, category_id=category_id)
    response.headers["X-Total-Count"] = str(len(products))
    return products


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses=_errors,
    summary="Get a single product by ID",
    dependencies=[Depends(_read_key)],
)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductEnvelope:
    return ProductEnvelope(data=await product_service.get_product(db, product_id))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_errors,
        400: {"description": "Missing field, or amount negative, non-finite or out of range", "model": ErrorResponse},
    },
    summary="Create a product",
    dependencies=[Depends(require_api_key("header-add-product", "add_product_key"))],
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create_product(db, payload)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        **_errors,
        400: {"description": "Amount out of range or missing last_op_id", "model": ErrorResponse},
    },
    summary="Update a product",
    description="Partial update: omitted fields keep their current values.",
    dependencies=[Depends(require_api_key("header-update-product", "update_product_key"))],
)
async def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.update_product(db, product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses=_errors,
    summary="Delete a product",
    dependencies=[Depends(require_api_key("header-delete-product", "delete_product_key"))],
)
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete_product(db, product_id)
    return MessageResponse(message="Product deleted successfully")
