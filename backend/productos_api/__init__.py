"""
Productos API: Application Package
===================================

What: Marks the `productos_api` directory as a Python package.
Who:  Imported by uvicorn (`productos_api.main:app`), Alembic and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │   Routes (Resource Handler)         │  ← status codes, Location header
    ├─────────────────────────────────────┤
    │   Error Handlers (Error Translator) │  ← failure → JSON error body
    ├─────────────────────────────────────┤
    │   Services (ProductService)         │  ← find / save / update / delete
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← async sessions per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
