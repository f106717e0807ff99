# products/serializers/__init__.py

from .category import CategorySerializer
from .gift_box import GiftBoxSerializer
from .product import (
    ProductBulkFeaturedSerializer,
    ProductBulkStatusSerializer,
    ProductSerializer,
)

__all__ = [
    "CategorySerializer",
    "GiftBoxSerializer",
    "ProductSerializer",
    "ProductBulkStatusSerializer",
    "ProductBulkFeaturedSerializer",
]
