"""
Repositories module initialization
"""

from .product import ProductRepository, DUPLICATE_PRODUCT_MESSAGE

__all__ = [
    "ProductRepository",
    "DUPLICATE_PRODUCT_MESSAGE",
]
