"""
Stockroom Backend — Product Request/Response Schemas
======================================================

What:  The API contract for /api/products.

Numbers are type-checked by Pydantic (422 for "abc" or 2.5 units) and names
longer than the column are a 422 too. Presence, sign, finiteness and the
column range of price/quantity are checked by ProductService (400).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockroom.schemas.common import NAME_MAX_LENGTH


class ProductCreate(BaseModel):
    """Body of POST /api/products. Every field is required by the service."""
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    category_id: Optional[uuid.UUID] = None
    price: Optional[float] = Field(default=None, description="Unit price, two decimals")
    quantity: Optional[int] = Field(default=None, description="Units in stock")
    last_op_id: Optional[uuid.UUID] = None


class ProductUpdate(BaseModel):
    """Body of PUT /api/products/{id}. Omitted fields keep their stored values."""
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    category_id: Optional[uuid.UUID] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    last_op_id: Optional[uuid.UUID] = None


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    category_id: uuid.UUID
    price: float
    quantity: int
    last_op_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductEnvelope(BaseModel):
    data: ProductResponse
