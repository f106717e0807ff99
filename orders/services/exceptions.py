# orders/services/exceptions.py

"""
ORDER DOMAIN EXCEPTIONS

InsufficientStockError is the catalog's; it is re-exported here so order
callers only import from one place.
"""

from products.services.exceptions import InsufficientStockError, ProductUnavailableError


class OrderError(Exception):
    """Base exception for order operations."""


class InvalidOrderTransitionError(OrderError):
    """Requested order/payment status change is not allowed."""


class PaymentError(OrderError):
    """Payment verification or amount mismatch."""


__all__ = [
    "OrderError",
    "InvalidOrderTransitionError",
    "InsufficientStockError",
    "PaymentError",
    "ProductUnavailableError",
]
