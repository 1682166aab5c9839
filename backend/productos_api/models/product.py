"""
Productos API: Product SQLAlchemy Model
========================================

What:  ORM model for the `productos` table and the closed Category set.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for
       migrations.
Who:   Used by ProductService for CRUD and by the schemas for the
       category type.

Table Design:
    - id: integer identity assigned by the database, immutable once set
    - price: NUMERIC(10, 2), never a float
    - stock: CHECK (stock >= 0) backs the schema-level rule
    - category: stored by member name (VARCHAR plus a CHECK listing the
      names), not a native enum, so the same schema works on SQLite and
      PostgreSQL
    - id and stock are 32-bit INTEGER columns; values above INTEGER_MAX
      never reach the database
"""

import enum
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import CheckConstraint, Enum, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from productos_api.database import Base
from productos_api.exceptions import UnknownCategoryError

# Upper bound of a PostgreSQL INTEGER; SQLite accepts a wider range
INTEGER_MAX = 2_147_483_647


class Category(str, enum.Enum):
    """Fixed set of product categories. Values equal member names."""

    ELECTRONICA = "ELECTRONICA"
    ROPA = "ROPA"
    ALIMENTOS = "ALIMENTOS"
    HOGAR = "HOGAR"
    DEPORTES = "DEPORTES"
    HERRAMIENTAS = "HERRAMIENTAS"
    JUGUETES = "JUGUETES"
    LIBROS = "LIBROS"

    @classmethod
    def names(cls) -> List[str]:
        return [member.name for member in cls]


def parse_category(value: str) -> Category:
    """
    Resolve a category path segment to a Category member.

    Matching is exact on the member name, the same way the path segment
    is bound to the enum in the published API (`/categoria/HOGAR`).

    Raises:
        UnknownCategoryError: `value` is not a category name
    """
    try:
        return Category[value]
    except KeyError:
        raise UnknownCategoryError(value, allowed=Category.names()) from None


class Product(Base):
    """
    A product offered by the store.

    Lifecycle:
        1. Created by POST /api/productos (id assigned on flush)
        2. Replaced by PUT, stock changed by PATCH .../stock
        3. Removed by DELETE
    """

    __tablename__ = "productos"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        default=None,
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )

    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    category: Mapped[Category] = mapped_column(
        Enum(
            Category,
            name="categoria",
            native_enum=False,
            create_constraint=True,
            length=30,
        ),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_productos_stock_non_negative"),
        Index("idx_productos_category", "category"),
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"category='{self.category}', stock={self.stock})>"
        )
