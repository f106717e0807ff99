"""
PATH: orders/models/__init__.py
"""

from .customer import Customer
from .order import Order
from .order_item import OrderItem
from .payment_attempt import PaymentAttempt

__all__ = [
    "Customer",
    "Order",
    "OrderItem",
    "PaymentAttempt",
]
