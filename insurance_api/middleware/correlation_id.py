"""
Correlation ID Middleware for request tracing
Ensures every request has a unique correlation ID that appears in every log entry
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from insurance_api.core.config import config
from insurance_api.core.context import get_correlation_id, set_correlation_id

__all__ = ["CorrelationIdMiddleware", "get_correlation_id", "set_correlation_id"]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle correlation IDs for request tracing
    
    - Extracts correlation ID from request headers (or generates a new one)
    - Stores it in context for use throughout the request lifecycle
    - Adds it to response headers
    """
    
    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(
            config.correlation_id_header,
            str(uuid.uuid4())
        )
        
        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id
        
        response = await call_next(request)
        
        response.headers[config.correlation_id_header] = correlation_id
        
        return response
