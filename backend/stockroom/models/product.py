"""
Stockroom Backend — Product SQLAlchemy Model
==============================================

What:  ORM model for the `products` table.

Table Design:
    - category_id: foreign key with ON DELETE RESTRICT; CategoryService also
      refuses to delete a category that still has products, which covers
      SQLite where foreign keys are not enforced by default
    - price: NUMERIC(12, 2) read back as float (asdecimal=False) so JSON
      responses carry a number
    - quantity: units in stock, never negative (checked by ProductService)
    - index on category_id: backs the `?category_id=` listing filter and the
      "category still in use" check
"""

import uuid

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.database import Base, TimestampedMixin


class Product(TimestampedMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    )
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_op_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    __table_args__ = (
        Index("idx_products_category_id", "category_id"),
        Index("idx_products_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"price={self.price}, quantity={self.quantity})>"
        )
