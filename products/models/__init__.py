"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .category import Category
from .gift_box import GiftBox
from .product import Product

__all__ = [
    "Category",
    "GiftBox",
    "Product",
]
