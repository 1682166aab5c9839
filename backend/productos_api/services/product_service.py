"""
Productos API: Product Service (Persistence Collaborator)
==========================================================

What:  find-all, find-by-id, find-by-category, save, update, update-stock
       and delete over the `productos` table.
How:   Plain SQLAlchemy 2.0 async queries on the request's AsyncSession.
       Changes are flushed here and committed by get_db_session.
Who:   Called by the /api/productos route handlers.
When:  Once per request, inside the session opened by get_db_session.

Error Handling Strategy:
    _get() returns None for a missing row, and for an id no INTEGER
    column can hold. Every public method that needs an existing product
    turns that absence into ProductNotFoundError. SQLAlchemy failures
    are wrapped in DatabaseError. Application errors propagate untouched
    to the error translator.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from productos_api.exceptions import (
    DatabaseError,
    InsufficientStockError,
    ProductNotFoundError,
)
from productos_api.models.product import INTEGER_MAX, Category, Product

logger = logging.getLogger(__name__)


class ProductService:
    """
    Stateless product persistence operations.

    Each method receives the request's session, so a single instance is
    shared by all requests.
    """

    async def find_all(self, db: AsyncSession) -> List[Product]:
        """All products ordered by id."""
        try:
            result = await db.execute(select(Product).order_by(Product.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("find_all", e)

    async def find_by_id(self, db: AsyncSession, product_id: int) -> Product:
        """
        Retrieve a single product.

        Raises:
            ProductNotFoundError: no product with `product_id` (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        return await self._get_or_raise(db, product_id)

    async def find_by_category(self, db: AsyncSession, category: Category) -> List[Product]:
        """Products whose category equals `category`, ordered by id."""
        try:
            result = await db.execute(
                select(Product)
                .where(Product.category == category)
                .order_by(Product.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("find_by_category", e, category=category.value)

    async def save(self, db: AsyncSession, product: Product) -> Product:
        """
        Persist a new product and return it with its assigned id.

        The id is assigned by the database on flush; any id already set
        on `product` is discarded.
        """
        self._check_stock(product.id, product.stock)
        product.id = None
        try:
            db.add(product)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("save", e)
        logger.info("Product created: id=%s name=%r", product.id, product.name)
        return product

    async def update(self, db: AsyncSession, product_id: int, changes: Product) -> Product:
        """
        Replace every field of an existing product except its id.

        Raises:
            ProductNotFoundError: no product with `product_id`
            InsufficientStockError: `changes.stock` is negative
        """
        existing = await self._get_or_raise(db, product_id)
        self._check_stock(product_id, changes.stock)

        existing.name = changes.name
        existing.description = changes.description
        existing.price = changes.price
        existing.stock = changes.stock
        existing.category = changes.category
        await self._flush(db, "update", product_id)
        logger.info("Product updated: id=%s", product_id)
        return existing

    async def update_stock(self, db: AsyncSession, product_id: int, stock: int) -> Product:
        """
        Set the stock of an existing product.

        Raises:
            ProductNotFoundError: no product with `product_id`
            InsufficientStockError: `stock` is negative; nothing is changed
        """
        existing = await self._get_or_raise(db, product_id)
        self._check_stock(product_id, stock)

        previous = existing.stock
        existing.stock = stock
        await self._flush(db, "update_stock", product_id)
        logger.info("Stock updated: id=%s %d -> %d", product_id, previous, stock)
        return existing

    async def delete(self, db: AsyncSession, product_id: int) -> None:
        """
        Remove a product.

        Raises:
            ProductNotFoundError: no product with `product_id`
        """
        existing = await self._get_or_raise(db, product_id)
        try:
            await db.delete(existing)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error("delete", e, product_id=product_id)
        logger.info("Product deleted: id=%s", product_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get(self, db: AsyncSession, product_id: int) -> Optional[Product]:
        """
        Look up a product by id; None when no row matches.

        Ids outside 1..INTEGER_MAX cannot name a stored row and are not
        sent to the driver.
        """
        if not 1 <= product_id <= INTEGER_MAX:
            return None
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._database_error("find_by_id", e, product_id=product_id)

    async def _get_or_raise(self, db: AsyncSession, product_id: int) -> Product:
        product = await self._get(db, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def _flush(self, db: AsyncSession, operation: str, product_id: int) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            raise self._database_error(operation, e, product_id=product_id)

    @staticmethod
    def _check_stock(product_id: Optional[int], stock: Optional[int]) -> None:
        if stock is None or not 0 <= stock <= INTEGER_MAX:
            raise InsufficientStockError(product_id, stock)

    @staticmethod
    def _database_error(operation: str, error: Exception, **context) -> DatabaseError:
        logger.error("Database error in %s: %s", operation, str(error), exc_info=True)
        return DatabaseError(
            context={"operation": operation, "error_type": type(error).__name__, **context},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
