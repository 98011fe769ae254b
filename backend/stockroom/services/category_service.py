"""
Stockroom Backend — Category Service
======================================

What:  Business rules for categories.

    create / update → name and last_op_id required; name (trimmed) unique
                      among the other categories; acting user must exist
    update          → answers with the full category list afterwards
    delete          → refused with 409 while products still reference it
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.database import utcnow
from stockroom.exceptions import ConflictError, NotFoundError
from stockroom.models.category import Category
from stockroom.models.product import Product
from stockroom.schemas.category import CategoryResponse, CategoryWrite
from stockroom.services.common import clean, database_errors, require_fields
from stockroom.services.user_service import user_service

logger = logging.getLogger(__name__)


class CategoryService:

    async def get_category_model(self, db: AsyncSession, category_id: UUID) -> Category:
        """Fetch the ORM row or raise NotFoundError."""
        result = await db.execute(select(Category).where(Category.id == category_id))
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError(resource="category", resource_id=str(category_id))
        return category

    async def _all_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        result = await db.execute(select(Category).order_by(Category.created_at))
        return [CategoryResponse.model_validate(c) for c in result.scalars().all()]

    async def ensure_unique_name(
        self, db: AsyncSession, name: str, exclude_id: Optional[UUID] = None
    ) -> None:
        query = select(Category.id).where(Category.name == name)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ConflictError(
                message=f"A category named '{name}' already exists",
                field="name",
            )

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        with database_errors("list categories"):
            categories = await self._all_categories(db)
        if not categories:
            raise NotFoundError(resource="category", message="No categories found")
        return categories

    async def get_category(self, db: AsyncSession, category_id: UUID) -> CategoryResponse:
        with database_errors("retrieve the category", category_id=str(category_id)):
            category = await self.get_category_model(db, category_id)
        return CategoryResponse.model_validate(category)

    async def create_category(
        self, db: AsyncSession, payload: CategoryWrite
    ) -> CategoryResponse:
        require_fields(name=payload.name, last_op_id=payload.last_op_id)
        name = clean(payload.name)

        with database_errors("create the category"):
            await self.ensure_unique_name(db, name)
            acting = await user_service.validate_acting_user(db, payload.last_op_id)

            now = utcnow()
            category = Category(
                name=name,
                last_op_id=acting.id,
                created_at=now,
                updated_at=now,
            )
            db.add(category)
            await db.flush()

        logger.info("Category %s ('%s') created by %s", category.id, name, acting.id)
        return CategoryResponse.model_validate(category)

    async def update_category(
        self, db: AsyncSession, category_id: UUID, payload: CategoryWrite
    ) -> List[CategoryResponse]:
        """Rename a category; returns every category after the change."""
        with database_errors("update the category", category_id=str(category_id)):
            category = await self.get_category_model(db, category_id)

            require_fields(name=payload.name, last_op_id=payload.last_op_id)
            name = clean(payload.name)
            await self.ensure_unique_name(db, name, exclude_id=category.id)
            acting = await user_service.validate_acting_user(db, payload.last_op_id)

            category.name = name
            category.last_op_id = acting.id
            category.updated_at = utcnow()
            await db.flush()

            logger.info("Category %s renamed to '%s' by %s", category.id, name, acting.id)
            return await self._all_categories(db)

    async def delete_category(self, db: AsyncSession, category_id: UUID) -> None:
        with database_errors("delete the category", category_id=str(category_id)):
            category = await self.get_category_model(db, category_id)

            result = await db.execute(
                select(func.count(Product.id)).where(Product.category_id == category.id)
            )
            in_use = result.scalar() or 0
            if in_use:
                raise ConflictError(
                    message=f"Category is still used by {in_use} product(s)",
                    context={"category_id": str(category_id), "product_count": in_use},
                )

            await db.delete(category)
            await db.flush()
        logger.info("Category %s deleted", category_id)


category_service = CategoryService()
