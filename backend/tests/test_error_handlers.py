"""
Productos API: Error Translator Unit Tests
===========================================

What:  Tests for the failure → HTTP response mapping in error_handlers.py.
How:   Calls translate_exception() directly with a bare Starlette Request.
"""

import json

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.requests import Request

from productos_api.error_handlers import (
    ERROR_TABLE,
    field_errors,
    field_name,
    match_rule,
    translate_exception,
)
from productos_api.exceptions import (
    DatabaseError,
    InsufficientStockError,
    ProductNotFoundError,
    UnknownCategoryError,
)


def make_request(path: str = "/api/productos/7", method: str = "GET") -> Request:
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "headers": [],
        "query_string": b"",
    })


def body_of(response) -> dict:
    return json.loads(response.body)


class TestFieldNames:
    """Tests for pydantic error location → field key."""

    def test_body_field(self):
        assert field_name({"loc": ("body", "name"), "type": "missing"}) == "name"

    def test_path_parameter(self):
        assert field_name({"loc": ("path", "product_id"), "type": "int_parsing"}) == "product_id"

    def test_nested_location_joined(self):
        assert field_name({"loc": ("body", "items", 0, "sku")}) == "items.0.sku"

    def test_missing_body(self):
        assert field_name({"loc": ("body",), "type": "missing"}) == "body"

    def test_invalid_json(self):
        assert field_name({"loc": ("body", 14), "type": "json_invalid"}) == "body"

    def test_last_message_wins(self):
        errors = [
            {"loc": ("body", "price"), "msg": "first"},
            {"loc": ("body", "name"), "msg": "Field required"},
            {"loc": ("body", "price"), "msg": "second"},
        ]
        assert field_errors(errors) == {"price": "second", "name": "Field required"}


class TestDispatchTable:
    """First matching row wins; the table ends with a catch-all."""

    def test_catch_all_is_last(self):
        assert ERROR_TABLE[-1].exc_type is Exception
        assert ERROR_TABLE[-1].status_code == 500

    @pytest.mark.parametrize(
        "exc, status",
        [
            (ProductNotFoundError(1), 404),
            (InsufficientStockError(1, -1), 400),
            (UnknownCategoryError("X"), 400),
            (RequestValidationError([]), 400),
            (DatabaseError(), 500),
            (ValueError("boom"), 500),
        ],
    )
    def test_status_by_failure(self, exc, status):
        assert translate_exception(make_request(), exc).status_code == status

    def test_http_exception_keeps_its_status(self):
        rule = match_rule(HTTPException(status_code=405))
        assert rule.status_code is None
        response = translate_exception(make_request(), HTTPException(status_code=405))
        assert response.status_code == 405
        assert body_of(response)["message"] == "Method Not Allowed"


class TestResponseBodies:
    """Shape of the JSON bodies."""

    def test_not_found_body(self):
        response = translate_exception(make_request("/api/productos/7"), ProductNotFoundError(7))

        body = body_of(response)
        assert set(body) == {"timestamp", "status", "message", "path"}
        assert body["status"] == 404
        assert body["path"] == "/api/productos/7"
        assert "7" in body["message"]

    def test_validation_body(self):
        exc = RequestValidationError([
            {"loc": ("body", "name"), "msg": "Field required", "type": "missing"},
            {"loc": ("body", "stock"), "msg": "Input should be greater than or equal to 0",
             "type": "greater_than_equal"},
        ])

        body = body_of(translate_exception(make_request("/api/productos", "POST"), exc))

        assert set(body) == {"timestamp", "status", "path", "errors"}
        assert body["status"] == 400
        assert body["path"] == "/api/productos"
        assert body["errors"] == {
            "name": "Field required",
            "stock": "Input should be greater than or equal to 0",
        }

    def test_unclassified_exposes_message(self):
        body = body_of(translate_exception(make_request(), RuntimeError("disk on fire")))

        assert body["status"] == 500
        assert body["message"] == "disk on fire"

    def test_timestamp_is_iso_8601(self):
        from datetime import datetime

        body = body_of(translate_exception(make_request(), ProductNotFoundError(1)))
        stamp = body["timestamp"].replace("Z", "+00:00")
        assert datetime.fromisoformat(stamp).tzinfo is not None
