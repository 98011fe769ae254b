"""
Stockroom Backend — User Service
==================================

What:  Business rules for users, plus the acting-user check every other
       service relies on.
Who:   Called by the /api/users route handlers; `validate_acting_user` is
       also called by CategoryService and ProductService.

Rules enforced here:
    create           → all fields present; email and name unique (trimmed);
                       acting user exists and is an admin; role whitelisted;
                       password stored hashed
    update           → optional name/role fall back to stored values; a new
                       name must not belong to another user; a new role must
                       be whitelisted; acting user must exist
    change_password  → old password matches; both new entries match; new
                       differs from old; acting user is an admin
    list / get / delete → unknown id or empty table is a 404

Every method runs inside `database_errors()`, so callers only ever see
exceptions from stockroom.exceptions.
"""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.config import settings
from stockroom.database import utcnow
from stockroom.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from stockroom.models.user import User
from stockroom.schemas.user import (
    PasswordChange,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from stockroom.security import hash_password, verify_password
from stockroom.services.common import clean, database_errors, require_fields

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; every method receives the request's AsyncSession."""

    # ── Lookups ───────────────────────────────────────────────────────────

    async def get_user_model(self, db: AsyncSession, user_id: UUID) -> User:
        """Fetch the ORM row or raise NotFoundError."""
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        with database_errors("list users"):
            result = await db.execute(select(User).order_by(User.created_at))
            users = list(result.scalars().all())
        if not users:
            raise NotFoundError(resource="user", message="No users found")
        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, db: AsyncSession, user_id: UUID) -> UserResponse:
        with database_errors("retrieve the user", user_id=str(user_id)):
            user = await self.get_user_model(db, user_id)
        return UserResponse.model_validate(user)

    # ── Validation ────────────────────────────────────────────────────────

    async def validate_acting_user(
        self,
        db: AsyncSession,
        last_op_id: Optional[UUID],
        roles: Optional[Sequence[str]] = None,
    ) -> User:
        """
        Resolve `last_op_id` to the user performing a write.

        Args:
            last_op_id: ID sent by the client as the acting user
            roles:      When given, the acting user's role must be one of these

        Raises:
            ValidationError: last_op_id missing
            NotFoundError:   no user with that ID
            ForbiddenError:  user exists but has the wrong role
        """
        if last_op_id is None:
            raise ValidationError(message="last_op_id is required", field="last_op_id")

        result = await db.execute(select(User).where(User.id == last_op_id))
        acting = result.scalar_one_or_none()
        if acting is None:
            raise NotFoundError(resource="acting user", resource_id=str(last_op_id))

        if roles and acting.role not in roles:
            logger.warning(
                "User %s (role=%s) refused: requires one of %s",
                acting.id, acting.role, list(roles),
            )
            raise ForbiddenError(
                message=f"Acting user must have one of the roles: {', '.join(roles)}",
                context={"last_op_id": str(last_op_id), "required_roles": list(roles)},
            )
        return acting

    def validate_role(self, role: str) -> None:
        allowed = settings.allowed_roles_list
        if role not in allowed:
            raise ValidationError(
                message=f"Invalid role '{role}'. Allowed roles: {', '.join(allowed)}",
                field="role",
                context={"allowed_roles": allowed},
            )

    async def ensure_unique(
        self,
        db: AsyncSession,
        field: str,
        value: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """Raise ConflictError if another user already holds `value` in `field`."""
        column = getattr(User, field)
        query = select(User.id).where(column == value)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ConflictError(
                message=f"A user with this {field} already exists",
                field=field,
            )

    def validate_password_fields(
        self,
        old_password: Optional[str],
        new_password1: Optional[str],
        new_password2: Optional[str],
        current_hash: str,
    ) -> None:
        """Check the three password entries against each other and the stored hash."""
        require_fields(
            old_password=old_password,
            new_password1=new_password1,
            new_password2=new_password2,
        )
        if not verify_password(old_password, current_hash):
            raise ValidationError(message="Old password is incorrect", field="old_password")
        if new_password1 != new_password2:
            raise ValidationError(message="New passwords do not match", field="new_password2")
        if new_password1 == old_password:
            raise ValidationError(
                message="New password must be different from the old password",
                field="new_password1",
            )

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        """
        Create a user on behalf of an admin.

        Check order: required fields → email unique → name unique →
        acting admin → role whitelist.
        """
        require_fields(
            email=payload.email,
            password=payload.password,
            name=payload.name,
            role=payload.role,
            last_op_id=payload.last_op_id,
        )
        email = clean(payload.email)
        name = clean(payload.name)
        password = clean(payload.password)

        with database_errors("create the user"):
            await self.ensure_unique(db, "email", email)
            await self.ensure_unique(db, "name", name)
            acting = await self.validate_acting_user(
                db, payload.last_op_id, roles=[settings.admin_role]
            )
            self.validate_role(payload.role)

            now = utcnow()
            user = User(
                email=email,
                password=hash_password(password),
                name=name,
                role=payload.role,
                last_op_id=acting.id,
                created_at=now,
                updated_at=now,
            )
            db.add(user)
            await db.flush()

        logger.info("User %s created by %s (role=%s)", user.id, acting.id, user.role)
        return UserResponse.model_validate(user)

    async def update_user(
        self, db: AsyncSession, user_id: UUID, payload: UserUpdate
    ) -> UserResponse:
        with database_errors("update the user", user_id=str(user_id)):
            user = await self.get_user_model(db, user_id)

            name = clean(payload.name)
            if name:
                await self.ensure_unique(db, "name", name, exclude_id=user.id)
            if payload.role:
                self.validate_role(payload.role)
            acting = await self.validate_acting_user(db, payload.last_op_id)

            user.name = name or user.name
            user.role = payload.role or user.role
            user.last_op_id = acting.id
            user.updated_at = utcnow()
            await db.flush()

        logger.info("User %s updated by %s", user.id, acting.id)
        return UserResponse.model_validate(user)

    async def change_password(
        self, db: AsyncSession, user_id: UUID, payload: PasswordChange
    ) -> None:
        with database_errors("change the password", user_id=str(user_id)):
            user = await self.get_user_model(db, user_id)

            new_password = clean(payload.new_password1)
            self.validate_password_fields(
                clean(payload.old_password),
                new_password,
                clean(payload.new_password2),
                user.password,
            )
            acting = await self.validate_acting_user(
                db, payload.last_op_id, roles=[settings.admin_role]
            )

            user.password = hash_password(new_password)
            user.last_op_id = acting.id
            user.updated_at = utcnow()
            await db.flush()

        logger.info("Password of user %s changed by %s", user.id, acting.id)

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> None:
        with database_errors("delete the user", user_id=str(user_id)):
            user = await self.get_user_model(db, user_id)
            await db.delete(user)
            await db.flush()
        logger.info("User %s deleted", user_id)


user_service = UserService()
