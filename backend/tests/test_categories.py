"""Tests for the closed Category set, path-segment parsing and its column."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from productos_api.exceptions import UnknownCategoryError
from productos_api.models.product import Category, parse_category


class TestParseCategory:

    @pytest.mark.parametrize("name", Category.names())
    def test_every_member_name_parses(self, name):
        assert parse_category(name) is Category[name]

    def test_unknown_value_rejected(self):
        with pytest.raises(UnknownCategoryError, match="MUEBLES") as exc_info:
            parse_category("MUEBLES")
        assert "HERRAMIENTAS" in exc_info.value.context["allowed"]

    def test_match_is_case_sensitive(self):
        """Only exact member names are accepted, like the enum path binding."""
        with pytest.raises(UnknownCategoryError):
            parse_category("herramientas")

    def test_empty_rejected(self):
        with pytest.raises(UnknownCategoryError):
            parse_category("")


class TestCategoryColumn:
    """The table itself refuses names outside the Category set."""

    INSERT = text(
        "INSERT INTO productos (name, price, stock, category) "
        "VALUES ('Sillon', 10.00, 1, :category)"
    )

    @pytest.mark.asyncio
    async def test_unknown_name_violates_check(self, db_schema):
        from productos_api.database import engine

        with pytest.raises(IntegrityError):
            async with engine.begin() as conn:
                await conn.execute(self.INSERT, {"category": "MUEBLES"})

    @pytest.mark.asyncio
    async def test_member_name_accepted(self, db_schema):
        from productos_api.database import engine

        async with engine.begin() as conn:
            await conn.execute(self.INSERT, {"category": "HOGAR"})
            count = await conn.scalar(text("SELECT COUNT(*) FROM productos"))

        assert count == 1
