"""
Stockroom Backend — Product Service
=====================================

What:  Business rules for products.

    create → name, category_id, price, quantity and last_op_id required;
             price and quantity non-negative, finite and within the column
             limits; category must exist; acting user must exist
    update → partial: every omitted field keeps its stored value; supplied
             values go through the same checks as create
    list   → optional category filter; an empty result is a 404
"""

import logging
import math
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.database import utcnow
from stockroom.exceptions import NotFoundError, ValidationError
from stockroom.models.product import Product
from stockroom.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from stockroom.services.category_service import category_service
from stockroom.services.common import clean, database_errors, is_blank, require_fields
from stockroom.services.user_service import user_service

logger = logging.getLogger(__name__)

# Column limits: products.price is NUMERIC(12, 2), products.quantity INTEGER
MAX_PRICE = 10**10
MAX_QUANTITY = 2**31 - 1


class ProductService:

    async def get_product_model(self, db: AsyncSession, product_id: UUID) -> Product:
        result = await db.execute(select(Product).where(Product.id == product_id))
        product = result.scalar_one_or_none()
        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return product

    def validate_amounts(self, price: Optional[float], quantity: Optional[int]) -> None:
        """
        Reject amounts the products table cannot hold; None means "not supplied".

        price:    finite, 0 <= price < MAX_PRICE (NUMERIC(12, 2))
        quantity: 0 <= quantity <= MAX_QUANTITY (32-bit INTEGER)
        """
        if price is not None:
            if not math.isfinite(price):
                raise ValidationError(message="price must be a finite number", field="price")
            if price < 0:
                raise ValidationError(message="price must not be negative", field="price")
            if price >= MAX_PRICE:
                raise ValidationError(
                    message=f"price must be below {MAX_PRICE}", field="price"
                )
        if quantity is not None:
            if quantity < 0:
                raise ValidationError(message="quantity must not be negative", field="quantity")
            if quantity > MAX_QUANTITY:
                raise ValidationError(
                    message=f"quantity must not exceed {MAX_QUANTITY}", field="quantity"
                )

    async def list_products(
        self, db: AsyncSession, category_id: Optional[UUID] = None
    ) -> List[ProductResponse]:
        with database_errors("list products"):
            query = select(Product).order_by(Product.created_at)
            if category_id is not None:
                query = query.where(Product.category_id == category_id)
            result = await db.execute(query)
            products = list(result.scalars().all())
        if not products:
            raise NotFoundError(resource="product", message="No products found")
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, db: AsyncSession, product_id: UUID) -> ProductResponse:
        with database_errors("retrieve the product", product_id=str(product_id)):
            product = await self.get_product_model(db, product_id)
        return ProductResponse.model_validate(product)

    async def create_product(
        self, db: AsyncSession, payload: ProductCreate
    ) -> ProductResponse:
        require_fields(
            name=payload.name,
            category_id=payload.category_id,
            last_op_id=payload.last_op_id,
            price=payload.price,
            quantity=payload.quantity,
        )
        self.validate_amounts(payload.price, payload.quantity)

        with database_errors("create the product"):
            category = await category_service.get_category_model(db, payload.category_id)
            acting = await user_service.validate_acting_user(db, payload.last_op_id)

            now = utcnow()
            product = Product(
                name=clean(payload.name),
                category_id=category.id,
                price=payload.price,
                quantity=payload.quantity,
                last_op_id=acting.id,
                created_at=now,
                updated_at=now,
            )
            db.add(product)
            await db.flush()

        logger.info("Product %s created in category %s by %s", product.id, category.id, acting.id)
        return ProductResponse.model_validate(product)

    async def update_product(
        self, db: AsyncSession, product_id: UUID, payload: ProductUpdate
    ) -> ProductResponse:
        with database_errors("update the product", product_id=str(product_id)):
            product = await self.get_product_model(db, product_id)

            self.validate_amounts(payload.price, payload.quantity)
            if payload.category_id is not None:
                await category_service.get_category_model(db, payload.category_id)
            acting = await user_service.validate_acting_user(db, payload.last_op_id)

            if not is_blank(payload.name):
                product.name = clean(payload.name)
            if payload.category_id is not None:
                product.category_id = payload.category_id
            if payload.price is not None:
                product.price = payload.price
            if payload.quantity is not None:
                product.quantity = payload.quantity
            product.last_op_id = acting.id
            product.updated_at = utcnow()
            await db.flush()

        logger.info("Product %s updated by %s", product.id, acting.id)
        return ProductResponse.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: UUID) -> None:
        with database_errors("delete the product", product_id=str(product_id)):
            product = await self.get_product_model(db, product_id)
            await db.delete(product)
            await db.flush()
        logger.info("Product %s deleted", product_id)


product_service = ProductService()
