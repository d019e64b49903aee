"""
Models module initialization
"""

from .product import Product, ProductLocation, normalize_price
from .claims import TokenClaims

__all__ = [
    "Product",
    "ProductLocation",
    "normalize_price",
    "TokenClaims",
]
