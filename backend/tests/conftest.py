"""
Productos API: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before the application is imported,
       so the settings singleton and the engine point at a throwaway
       SQLite file.

Fixtures:
    ├── mock_db_session: AsyncMock standing in for AsyncSession (unit tests)
    ├── sample_product_data: field values for a Product row
    ├── product_payload: JSON body for POST/PUT
    ├── db_schema: drops and recreates all tables around a test
    └── test_client: HTTPX AsyncClient bound to the FastAPI app
"""

import os
import tempfile
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

# Must run before any productos_api import
_test_dir = tempfile.mkdtemp(prefix="productos_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
        result = await product_service.find_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product_data():
    from productos_api.models.product import Category

    return {
        "id": 1,
        "name": "Widget",
        "description": "Llave ajustable",
        "price": Decimal("9.99"),
        "stock": 10,
        "category": Category.HERRAMIENTAS,
    }


@pytest.fixture
def product_payload():
    return {
        "name": "Widget",
        "description": "Llave ajustable",
        "price": 9.99,
        "stock": 10,
        "category": "HERRAMIENTAS",
    }


@pytest_asyncio.fixture
async def db_schema():
    """Fresh, empty tables for one test; ids start again at 1."""
    from productos_api.database import Base, engine
    from productos_api.models import product  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_schema):
    """
    Async HTTP client talking to the app over ASGITransport.

    raise_app_exceptions=False: Starlette re-raises unhandled exceptions
    after the 500 handler has answered; the client should see that answer.
    """
    from productos_api.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
