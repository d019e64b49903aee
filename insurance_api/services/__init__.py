"""
Services module initialization
"""

from .product import ProductService
from .token import TokenService, get_token_service

__all__ = [
    "ProductService",
    "TokenService",
    "get_token_service",
]
