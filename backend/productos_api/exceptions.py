"""
Productos API: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the product domain.
How:   Each exception carries a message and optional context dict.
       The error translator (error_handlers.py) is the only place that
       turns them into HTTP status codes and JSON bodies.
Who:   Raised by the product service and category parsing; never caught
       by route handlers.

Exception Hierarchy:
    ProductosError (base)
    ├── ProductNotFoundError     → 404 Not Found
    ├── InsufficientStockError   → 400 Bad Request (domain rule)
    ├── UnknownCategoryError     → 400 Bad Request (path segment)
    └── DatabaseError            → 500 Internal Server Error

Request body validation failures are pydantic's RequestValidationError,
raised by FastAPI before the handler body runs.
"""

from typing import Any, Dict, Optional


class ProductosError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable description, returned in the error body
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ProductNotFoundError(ProductosError):
    """
    Raised when no product exists for the requested id.

    When:    GET/PUT/PATCH/DELETE on /api/productos/{id} with an unknown id.
    HTTP:    404 Not Found

    The lookup itself returns None for a missing row; the service turns
    that absence into this exception at its boundary.
    """

    def __init__(
        self,
        product_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["product_id"] = product_id
        super().__init__(message=f"Producto no encontrado con id: {product_id}", context=ctx)
        self.product_id = product_id


class InsufficientStockError(ProductosError):
    """
    Raised when an operation would leave a product with negative stock.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        product_id: Optional[int],
        stock: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update(product_id=product_id, stock=stock)
        super().__init__(
            message=f"Stock insuficiente para el producto {product_id}: {stock} no es una cantidad válida",
            context=ctx,
        )
        self.product_id = product_id
        self.stock = stock


class UnknownCategoryError(ProductosError):
    """
    Raised when a category path segment does not name a known category.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        value: str,
        allowed: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["value"] = value
        message = f"Categoría no reconocida: '{value}'"
        if allowed:
            ctx["allowed"] = allowed
            message += f". Valores permitidos: {', '.join(allowed)}"
        super().__init__(message=message, context=ctx)
        self.value = value


class DatabaseError(ProductosError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The underlying SQLAlchemy error class name goes into `context`; the
    message stays generic.
    """

    def __init__(
        self,
        message: str = "Ocurrió un error de base de datos. Intente nuevamente.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
