"""
Productos API: Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the JSON contract of /api/productos.
How:   FastAPI validates request bodies against the request models before
       the handler body runs, and serializes responses through the
       response models. A failed validation raises RequestValidationError,
       which the error translator turns into a 400 with per-field errors.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, Field, PlainSerializer, field_validator

from productos_api.models.product import INTEGER_MAX, Category

# Decimal in, JSON number out
Price = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProductRequest(BaseModel):
    """
    Create / full-update payload: every Product field except `id`.

    Example:
        {
            "name": "Widget",
            "description": "Llave ajustable",
            "price": 9.99,
            "stock": 10,
            "category": "HERRAMIENTAS"
        }
    """
    name: str = Field(min_length=1, max_length=100, description="Nombre del producto")
    description: Optional[str] = Field(
        default=None,
        max_length=500,
        description="Descripción opcional",
    )
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2, description="Precio unitario")
    stock: int = Field(ge=0, le=INTEGER_MAX, description="Unidades disponibles")
    category: Category = Field(description="Categoría del producto")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("El nombre no puede estar vacío")
        return v.strip()


class StockUpdateRequest(BaseModel):
    """Stock-only update payload: `{"stock": 5}`."""
    stock: int = Field(ge=0, le=INTEGER_MAX, description="Nueva cantidad en stock")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(BaseModel):
    """Full representation of a stored product, `price` as a JSON number."""
    id: int = Field(description="Identificador asignado por la base de datos")
    name: str
    description: Optional[str] = None
    price: Price
    stock: int
    category: Category

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Error body for not-found, domain-rule and unexpected failures.

    Example:
        {
            "timestamp": "2026-10-19T12:00:00.000000+00:00",
            "status": 404,
            "message": "Producto no encontrado con id: 1",
            "path": "/api/productos/1"
        }
    """
    timestamp: datetime = Field(description="When the failure was reported (ISO 8601)")
    status: int = Field(description="HTTP status code")
    message: str = Field(description="Human-readable error description")
    path: str = Field(description="Request path that failed")


class ValidationErrorResponse(BaseModel):
    """Error body for request validation failures: one message per field."""
    timestamp: datetime
    status: int = 400
    path: str
    errors: Dict[str, str] = Field(description="Field name → validation message")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
