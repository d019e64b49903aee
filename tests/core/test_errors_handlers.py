"""Tests for error handling"""
import json

import pytest
from unittest.mock import patch
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from insurance_api.core.errors import (
    BadRequestError,
    ConflictError,
    ErrorResponse,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    error_response_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)


def make_request(path="/products/get", query=b"", method="GET"):
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": [],
        "scheme": "http",
        "server": ("testserver", 80),
    })


def body_of(response):
    return json.loads(response.body.decode())


class TestErrorResponse:
    """Test ErrorResponse exception classes"""

    def test_error_response_creation(self):
        error = ErrorResponse("Something went wrong", status_code=400)
        assert error.message == "Something went wrong"
        assert error.status_code == 400
        assert error.details == {}
        assert error.headers is None

    def test_error_response_default_status_code(self):
        assert ErrorResponse("Bad request").status_code == 400

    def test_error_response_str(self):
        assert str(ErrorResponse("Test error")) == "Test error"

    @pytest.mark.parametrize("error_cls, status_code", [
        (BadRequestError, 400),
        (UnauthorizedError, 401),
        (NotFoundError, 404),
        (ConflictError, 409),
        (InternalServerError, 500),
    ])
    def test_subclass_status_codes(self, error_cls, status_code):
        error = error_cls("message")
        assert isinstance(error, ErrorResponse)
        assert error.status_code == status_code

    def test_unauthorized_carries_bearer_challenge(self):
        assert UnauthorizedError("No token found").headers == {"WWW-Authenticate": "Bearer"}

    def test_internal_server_error_default_message(self):
        assert InternalServerError().message == "Internal server error"


class TestErrorHandlers:
    """Test error handler functions"""

    @pytest.mark.asyncio
    async def test_error_response_handler(self):
        request = make_request(query=b"productCode=1000")
        error = NotFoundError("Product not found")

        with patch('insurance_api.core.errors.logger') as mock_logger:
            response = await error_response_handler(request, error)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 404
        body = body_of(response)
        assert set(body) == {"statusCode", "timestamp", "path", "message"}
        assert body["statusCode"] == 404
        assert body["path"] == "/products/get?productCode=1000"
        assert body["message"] == "Product not found"
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_response_handler_keeps_headers(self):
        with patch('insurance_api.core.errors.logger'):
            response = await error_response_handler(
                make_request(method="POST"), UnauthorizedError("No token found")
            )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_server_errors_logged_as_error(self):
        with patch('insurance_api.core.errors.logger') as mock_logger:
            response = await error_response_handler(make_request(), InternalServerError("db down"))

        assert body_of(response)["message"] == "db down"
        mock_logger.error.assert_called_once()
        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_http_exception_handler(self):
        exception = HTTPException(status_code=404, detail="Not Found")

        with patch('insurance_api.core.errors.logger'):
            response = await http_exception_handler(make_request(path="/nope"), exception)

        assert response.status_code == 404
        body = body_of(response)
        assert body["message"] == "Not Found"
        assert body["path"] == "/nope"

    @pytest.mark.asyncio
    async def test_validation_exception_handler(self):
        exc = RequestValidationError([
            {"type": "missing", "loc": ("body", "price"), "msg": "Field required", "input": None}
        ])

        with patch('insurance_api.core.errors.logger'):
            response = await validation_exception_handler(make_request(method="POST"), exc)

        assert response.status_code == 400
        body = body_of(response)
        assert body["statusCode"] == 400
        assert body["message"][0]["loc"] == ["body", "price"]

    @pytest.mark.asyncio
    async def test_unhandled_exception_handler_hides_details(self):
        with patch('insurance_api.core.errors.logger') as mock_logger:
            response = await unhandled_exception_handler(make_request(), RuntimeError("secret detail"))

        assert response.status_code == 500
        body = body_of(response)
        assert body["message"] == "Internal server error"
        assert "secret detail" not in response.body.decode()
        mock_logger.error.assert_called_once()
