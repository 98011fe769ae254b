"""
Stockroom Backend — Category Service Unit Tests
=================================================

What we test:
    ✅ Required name/last_op_id on create and update
    ✅ Name uniqueness and acting-user check
    ✅ Delete refused while products reference the category
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from stockroom.database import utcnow
from stockroom.exceptions import ConflictError, NotFoundError, ValidationError
from stockroom.schemas.category import CategoryWrite
from stockroom.services.category_service import CategoryService


def make_category(name="Tools"):
    category = MagicMock()
    category.id = uuid4()
    category.name = name
    category.last_op_id = uuid4()
    category.created_at = utcnow()
    category.updated_at = utcnow()
    return category


class TestCreateCategory:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_name_required(self, mock_db_session):
        with pytest.raises(ValidationError, match="name"):
            await self.service.create_category(mock_db_session, CategoryWrite(last_op_id=uuid4()))

    @pytest.mark.asyncio
    async def test_duplicate_name(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(uuid4())
        with pytest.raises(ConflictError, match="Tools"):
            await self.service.create_category(
                mock_db_session, CategoryWrite(name=" Tools ", last_op_id=uuid4())
            )
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_acting_user(self, mock_db_session, make_result):
        mock_db_session.execute = AsyncMock(side_effect=[make_result(None), make_result(None)])
        with pytest.raises(NotFoundError, match="acting user"):
            await self.service.create_category(
                mock_db_session, CategoryWrite(name="Tools", last_op_id=uuid4())
            )

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session, make_result):
        acting = MagicMock()
        acting.id = uuid4()
        acting.role = "user"
        mock_db_session.execute = AsyncMock(side_effect=[make_result(None), make_result(acting)])

        def assign_id():
            mock_db_session.add.call_args[0][0].id = uuid4()
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_category(
            mock_db_session, CategoryWrite(name=" Tools ", last_op_id=acting.id)
        )

        assert result.name == "Tools"
        assert result.last_op_id == acting.id


class TestUpdateCategory:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_unknown_category_checked_first(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(None)
        with pytest.raises(NotFoundError, match="category"):
            await self.service.update_category(mock_db_session, uuid4(), CategoryWrite())

    @pytest.mark.asyncio
    async def test_fields_required(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(make_category())
        with pytest.raises(ValidationError, match="last_op_id"):
            await self.service.update_category(
                mock_db_session, uuid4(), CategoryWrite(name="Garden")
            )


class TestDeleteCategory:

    def setup_method(self):
        self.service = CategoryService()

    @pytest.mark.asyncio
    async def test_in_use_category_kept(self, mock_db_session, make_result):
        category = make_category()
        mock_db_session.execute = AsyncMock(side_effect=[make_result(category), make_result(3)])
        with pytest.raises(ConflictError, match="3 product"):
            await self.service.delete_category(mock_db_session, category.id)
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unused_category_deleted(self, mock_db_session, make_result):
        category = make_category()
        mock_db_session.execute = AsyncMock(side_effect=[make_result(category), make_result(0)])
        await self.service.delete_category(mock_db_session, category.id)
        mock_db_session.delete.assert_awaited_once_with(category)

    @pytest.mark.asyncio
    async def test_list_empty_is_not_found(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result([])
        with pytest.raises(NotFoundError, match="No categories found"):
            await self.service.list_categories(mock_db_session)
