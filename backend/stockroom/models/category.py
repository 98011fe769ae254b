"""
Stockroom Backend — Category SQLAlchemy Model
===============================================

What:  ORM model for the `categories` table. Products point at a category
       through `products.category_id`.
"""

import uuid

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.database import Base, TimestampedMixin


class Category(TimestampedMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    last_op_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    __table_args__ = (
        Index("idx_categories_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
