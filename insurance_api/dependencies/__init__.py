"""
Dependencies module initialization
"""

from .auth import authorize_request, require_role, ensure_admin
from .product import get_product_repository, get_product_service

__all__ = [
    "authorize_request",
    "require_role",
    "ensure_admin",
    "get_product_repository",
    "get_product_service",
]
