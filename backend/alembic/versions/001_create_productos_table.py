"""Create productos table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `productos` table backing /api/productos.
How:   Integer identity primary key, NUMERIC(10, 2) price, category stored
       as VARCHAR with a CHECK listing the allowed names, non-negative stock.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORIES = (
    "ELECTRONICA",
    "ROPA",
    "ALIMENTOS",
    "HOGAR",
    "DEPORTES",
    "HERRAMIENTAS",
    "JUGUETES",
    "LIBROS",
)


def upgrade() -> None:
    op.create_table(
        "productos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "category",
            sa.Enum(
                *CATEGORIES,
                name="categoria",
                native_enum=False,
                create_constraint=True,
                length=30,
            ),
            nullable=False,
        ),
        sa.CheckConstraint("stock >= 0", name="ck_productos_stock_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )

    # List-by-category filters on this column
    op.create_index("idx_productos_category", "productos", ["category"])


def downgrade() -> None:
    """Drops the table and every product in it."""
    op.drop_index("idx_productos_category", table_name="productos")
    op.drop_table("productos")
