"""
Stockroom Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Who:   Used by UserService for CRUD and by every service that validates the
       acting user (`last_op_id`) of a write.

Table Design:
    - email, name: each unique (enforced by constraint and checked by the
      service first so clients get a readable 409)
    - password: passlib hash string, never the plain text
    - role: one of settings.allowed_roles; not a DB enum so the whitelist
      can change without a migration
    - last_op_id: the user who last created/modified this row. Plain UUID
      column without a foreign key: deleting an operator must not cascade
      into or block the rows they touched. NULL only for the bootstrap admin
      before it is assigned to itself.
"""

import uuid
from typing import Optional

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.database import Base, TimestampedMixin


class User(TimestampedMixin, Base):
    """A person allowed to act on the catalog."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    last_op_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_users_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}', role='{self.role}')>"
