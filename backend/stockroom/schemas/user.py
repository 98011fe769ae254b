"""
Stockroom Backend — User Request/Response Schemas
===================================================

What:  The API contract for /api/users.

Request models declare every field Optional on purpose: presence and
blank-string checks are business rules answered with 400 by UserService,
while type errors (e.g. a malformed UUID) and over-long strings stay
FastAPI's 422.

UserResponse never carries the password hash.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from stockroom.schemas.common import NAME_MAX_LENGTH, ROLE_MAX_LENGTH


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(BaseModel):
    """Body of POST /api/users. All fields are required by the service."""
    email: Optional[str] = Field(
        default=None, max_length=NAME_MAX_LENGTH, description="Unique login email"
    )
    password: Optional[str] = Field(default=None, description="Plain-text password (stored hashed)")
    name: Optional[str] = Field(
        default=None, max_length=NAME_MAX_LENGTH, description="Unique display name"
    )
    role: Optional[str] = Field(
        default=None, max_length=ROLE_MAX_LENGTH, description="One of the configured roles"
    )
    last_op_id: Optional[uuid.UUID] = Field(default=None, description="Acting admin's user ID")


class UserUpdate(BaseModel):
    """Body of PUT /api/users/{id}. Omitted name/role keep their stored values."""
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    role: Optional[str] = Field(default=None, max_length=ROLE_MAX_LENGTH)
    last_op_id: Optional[uuid.UUID] = Field(default=None, description="Acting user's ID")


class PasswordChange(BaseModel):
    """
    Body of PUT /api/users/{id}/password.

    Accepts both snake_case and the camelCase names older clients send
    (oldPassword, newPassword1, newPassword2).
    """
    old_password: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("old_password", "oldPassword")
    )
    new_password1: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("new_password1", "newPassword1")
    )
    new_password2: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("new_password2", "newPassword2")
    )
    last_op_id: Optional[uuid.UUID] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: str
    last_op_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    """GET /api/users/{id} wraps the user in a `data` key."""
    data: UserResponse
