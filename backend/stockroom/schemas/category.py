"""
Stockroom Backend — Category Request/Response Schemas
=======================================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockroom.schemas.common import NAME_MAX_LENGTH


class CategoryWrite(BaseModel):
    """
    Body of POST and PUT /api/categories.

    Both fields are required for create and update alike; the service
    reports a missing one as 400.
    """
    name: Optional[str] = Field(
        default=None, max_length=NAME_MAX_LENGTH, description="Unique category name"
    )
    last_op_id: Optional[uuid.UUID] = Field(default=None, description="Acting user's ID")


class CategoryResponse(BaseModel):
    id: uuid.UUID
    name: str
    last_op_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryEnvelope(BaseModel):
    data: CategoryResponse
