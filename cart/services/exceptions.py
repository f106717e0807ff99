# cart/services/exceptions.py

"""
CART DOMAIN EXCEPTIONS
"""


class CartError(Exception):
    """Base exception for cart operations."""


class CartOwnerRequiredError(CartError):
    """Anonymous request without a client id."""


class EmptyCartError(CartError):
    """Checkout or quotation requested for an empty cart."""


class MinimumOrderError(CartError):
    """Cart/order total is below the configured minimum order."""

    def __init__(self, message: str, *, minimum, total):
        super().__init__(message)
        self.minimum = minimum
        self.total = total
