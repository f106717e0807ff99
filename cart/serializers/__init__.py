from .cart import (
    CartAddItemSerializer,
    CartItemSerializer,
    CartQuantitySerializer,
    CartSerializer,
    QuotationRequestSerializer,
)

__all__ = [
    "CartAddItemSerializer",
    "CartItemSerializer",
    "CartQuantitySerializer",
    "CartSerializer",
    "QuotationRequestSerializer",
]
