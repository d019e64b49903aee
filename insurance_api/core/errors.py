"""
Error handling utilities following FastAPI best practices

Every error leaving the service is rendered as
``{statusCode, timestamp, path, message}``.
"""

import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from insurance_api.core.config import config
from insurance_api.core.logger import logger


class ErrorResponse(Exception):
    """Custom exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(message)


class BadRequestError(ErrorResponse):
    """Malformed or missing required input"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthorizedError(ErrorResponse):
    """Authentication or authorization failure"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message,
            status.HTTP_401_UNAUTHORIZED,
            details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(ErrorResponse):
    """No matching record"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictError(ErrorResponse):
    """Uniqueness violation"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class InternalServerError(ErrorResponse):
    """Unexpected failure while serving a request"""

    def __init__(self, message: str = "Internal server error", details: dict = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    statusCode: int
    timestamp: str
    path: str
    message: Any


def _request_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def build_error_content(request: Request, status_code: int, message: Any) -> dict:
    """Build the standard error body for a request"""
    return {
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": _request_path(request),
        "message": message,
    }


def _log_error(request: Request, event: str, status_code: int, message: Any, error: Exception = None):
    metadata = {
        "event": event,
        "status_code": status_code,
        "url": str(request.url),
        "method": request.method,
    }

    if status_code >= 500:
        if config.environment == "development" and error is not None:
            # Include more detailed error info in development
            metadata["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        logger.error(f"Error: {message}", error=error, metadata=metadata)
    else:
        logger.warning(f"Error: {message}", metadata=metadata)


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for custom ErrorResponse exceptions"""
    _log_error(request, "error_response", exc.status_code, exc.message, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_content(request, exc.status_code, exc.message),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handler for framework HTTP exceptions such as unknown routes"""
    _log_error(request, "http_exception", exc.status_code, exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_content(request, exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handler for request validation failures, reported as 400"""
    errors = jsonable_encoder(exc.errors())
    _log_error(request, "validation_error", status.HTTP_400_BAD_REQUEST, "Request validation failed")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_content(request, status.HTTP_400_BAD_REQUEST, errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all handler, never leaks the underlying error to the caller"""
    _log_error(request, "unhandled_exception", status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_content(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        ),
    )
