"""
Stockroom Backend — Product Service Unit Tests
================================================

What we test:
    ✅ Required fields; price/quantity non-negative, finite, within column range
    ✅ Category reference and acting user on create
    ✅ Partial update keeps stored values
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from stockroom.database import utcnow
from stockroom.exceptions import NotFoundError, ValidationError
from stockroom.schemas.product import ProductCreate, ProductUpdate
from stockroom.services.product_service import MAX_PRICE, MAX_QUANTITY, ProductService


def make_product():
    product = MagicMock()
    product.id = uuid4()
    product.name = "Hammer"
    product.category_id = uuid4()
    product.price = 12.5
    product.quantity = 4
    product.last_op_id = uuid4()
    product.created_at = utcnow()
    product.updated_at = utcnow()
    return product


def make_ref():
    ref = MagicMock()
    ref.id = uuid4()
    ref.role = "user"
    return ref


class TestValidateAmounts:

    def setup_method(self):
        self.service = ProductService()

    def test_zero_allowed(self):
        self.service.validate_amounts(0, 0)

    def test_unsupplied_values_skipped(self):
        self.service.validate_amounts(None, None)

    def test_negative_price(self):
        with pytest.raises(ValidationError, match="price"):
            self.service.validate_amounts(-0.01, 1)

    def test_negative_quantity(self):
        with pytest.raises(ValidationError, match="quantity"):
            self.service.validate_amounts(1.0, -1)

    def test_non_finite_price(self):
        for price in (float("inf"), float("nan")):
            with pytest.raises(ValidationError, match="finite"):
                self.service.validate_amounts(price, 1)

    def test_price_beyond_column(self):
        self.service.validate_amounts(MAX_PRICE - 0.01, 1)
        with pytest.raises(ValidationError, match="price"):
            self.service.validate_amounts(MAX_PRICE, 1)

    def test_quantity_beyond_column(self):
        self.service.validate_amounts(1.0, MAX_QUANTITY)
        with pytest.raises(ValidationError, match="quantity"):
            self.service.validate_amounts(1.0, 10**20)


class TestCreateProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_price_and_quantity_required(self, mock_db_session):
        payload = ProductCreate(name="Hammer", category_id=uuid4(), last_op_id=uuid4())
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_product(mock_db_session, payload)
        assert exc_info.value.context["missing_fields"] == ["price", "quantity"]

    @pytest.mark.asyncio
    async def test_unknown_category(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(None)
        payload = ProductCreate(
            name="Hammer", category_id=uuid4(), price=9.99, quantity=1, last_op_id=uuid4()
        )
        with pytest.raises(NotFoundError, match="category"):
            await self.service.create_product(mock_db_session, payload)

    @pytest.mark.asyncio
    async def test_success(self, mock_db_session, make_result):
        category, acting = make_ref(), make_ref()
        mock_db_session.execute = AsyncMock(side_effect=[make_result(category), make_result(acting)])

        def assign_id():
            mock_db_session.add.call_args[0][0].id = uuid4()
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        payload = ProductCreate(
            name=" Hammer ", category_id=category.id, price=9.99, quantity=0, last_op_id=acting.id
        )
        result = await self.service.create_product(mock_db_session, payload)

        assert result.name == "Hammer"
        assert result.category_id == category.id
        assert result.quantity == 0
        assert result.last_op_id == acting.id


class TestUpdateProduct:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, mock_db_session, make_result):
        product, acting = make_product(), make_ref()
        original_category = product.category_id
        mock_db_session.execute = AsyncMock(side_effect=[make_result(product), make_result(acting)])

        result = await self.service.update_product(
            mock_db_session, product.id, ProductUpdate(quantity=10, last_op_id=acting.id)
        )

        assert result.quantity == 10
        assert result.name == "Hammer"
        assert result.price == 12.5
        assert result.category_id == original_category

    @pytest.mark.asyncio
    async def test_new_category_must_exist(self, mock_db_session, make_result):
        product = make_product()
        mock_db_session.execute = AsyncMock(side_effect=[make_result(product), make_result(None)])
        with pytest.raises(NotFoundError, match="category"):
            await self.service.update_product(
                mock_db_session, product.id, ProductUpdate(category_id=uuid4(), last_op_id=uuid4())
            )

    @pytest.mark.asyncio
    async def test_last_op_id_required(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(make_product())
        with pytest.raises(ValidationError, match="last_op_id"):
            await self.service.update_product(mock_db_session, uuid4(), ProductUpdate(name="Saw"))

    @pytest.mark.asyncio
    async def test_list_empty_is_not_found(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result([])
        with pytest.raises(NotFoundError, match="No products found"):
            await self.service.list_products(mock_db_session, category_id=uuid4())
