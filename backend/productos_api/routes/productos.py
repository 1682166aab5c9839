"""
Productos API: Product Route Handlers
======================================

What:  The /api/productos resource: list, get, list by category, create,
       full update, stock update, delete.
How:   Handlers are plain async functions. PRODUCT_ROUTES maps
       (method, path) to each handler together with its success status,
       and build_router() registers the table on an APIRouter. FastAPI
       validates path parameters and request bodies before a handler
       body runs.
Who:   Mounted by create_app() in main.py.
When:  Built once at import time; `router` is the registered result.

Handlers only translate shapes (request model → Product entity → response
model) and pick status codes. They make exactly one service call and
never catch application errors; error_handlers.py turns those into
responses.
"""

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from productos_api.database import get_db_session
from productos_api.models.product import Product, parse_category
from productos_api.schemas.product import (
    ErrorResponse,
    ProductRequest,
    ProductResponse,
    StockUpdateRequest,
    ValidationErrorResponse,
)
from productos_api.services.product_service import product_service

logger = logging.getLogger(__name__)

PREFIX = "/api/productos"


# ── Shape translation ─────────────────────────────────────────────────────

def to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock=product.stock,
        category=product.category,
    )


def to_entity(payload: ProductRequest) -> Product:
    return Product(
        name=payload.name,
        description=payload.description,
        price=payload.price,
        stock=payload.stock,
        category=payload.category,
    )


def location_for(product: Product) -> str:
    """Canonical path of a stored product, used for the Location header."""
    return f"{PREFIX}/{product.id}"


# ── Handlers ──────────────────────────────────────────────────────────────

async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    products = await product_service.find_all(db)
    return [to_response(p) for p in products]


async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    product = await product_service.find_by_id(db, product_id)
    return to_response(product)


async def list_products_by_category(
    categoria: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    """
    Products in one category.

    The path segment must be a category name (e.g. HERRAMIENTAS); anything
    else raises UnknownCategoryError, answered with 400.
    """
    category = parse_category(categoria)
    products = await product_service.find_by_category(db, category)
    logger.debug("Category %s: %d product(s)", category.value, len(products))
    return [to_response(p) for p in products]


async def create_product(
    payload: ProductRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    """Create a product; responds 201 with Location: /api/productos/{id}."""
    saved = await product_service.save(db, to_entity(payload))
    response.headers["Location"] = location_for(saved)
    return to_response(saved)


async def update_product(
    product_id: int,
    payload: ProductRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    updated = await product_service.update(db, product_id, to_entity(payload))
    return to_response(updated)


async def update_product_stock(
    product_id: int,
    payload: StockUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    updated = await product_service.update_stock(db, product_id, payload.stock)
    return to_response(updated)


async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await product_service.delete(db, product_id)
    return Response(status_code=204)


# ── Route table ───────────────────────────────────────────────────────────

_NOT_FOUND = {404: {"description": "Producto no encontrado", "model": ErrorResponse}}
_INVALID = {400: {"description": "Datos inválidos", "model": ValidationErrorResponse}}


class RouteSpec(NamedTuple):
    method: str
    path: str
    endpoint: Callable[..., Any]
    status_code: int
    response_model: Optional[Any]
    summary: str
    responses: Dict[int, Dict[str, Any]] = {}


PRODUCT_ROUTES: List[RouteSpec] = [
    RouteSpec("GET", "", list_products, 200, List[ProductResponse],
              "Listar todos los productos"),
    RouteSpec("GET", "/{product_id}", get_product, 200, ProductResponse,
              "Obtener producto por ID", _NOT_FOUND),
    RouteSpec("GET", "/categoria/{categoria}", list_products_by_category, 200,
              List[ProductResponse], "Listar productos por categoría",
              {400: {"description": "Categoría no reconocida", "model": ErrorResponse}}),
    RouteSpec("POST", "", create_product, 201, ProductResponse,
              "Crear un nuevo producto", _INVALID),
    RouteSpec("PUT", "/{product_id}", update_product, 200, ProductResponse,
              "Actualizar producto", {**_NOT_FOUND, **_INVALID}),
    RouteSpec("PATCH", "/{product_id}/stock", update_product_stock, 200, ProductResponse,
              "Actualizar stock", {**_NOT_FOUND, **_INVALID}),
    RouteSpec("DELETE", "/{product_id}", delete_product, 204, None,
              "Eliminar producto", _NOT_FOUND),
]


def build_router(routes: List[RouteSpec] = PRODUCT_ROUTES) -> APIRouter:
    """Register every RouteSpec on a fresh router under /api/productos."""
    router = APIRouter(prefix=PREFIX, tags=["Productos"])
    for entry in routes:
        options: Dict[str, Any] = {}
        if entry.status_code == 204:
            options["response_class"] = Response
        router.add_api_route(
            entry.path,
            entry.endpoint,
            methods=[entry.method],
            status_code=entry.status_code,
            response_model=entry.response_model,
            summary=entry.summary,
            responses=entry.responses,
            **options,
        )
    return router


router = build_router()
