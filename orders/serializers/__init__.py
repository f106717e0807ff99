from .customer import CustomerSerializer
from .order import (
    OrderItemSerializer,
    OrderListSerializer,
    OrderMarkFailedSerializer,
    OrderMarkPaidSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
    PaymentAttemptSerializer,
)

__all__ = [
    "CustomerSerializer",
    "OrderItemSerializer",
    "OrderListSerializer",
    "OrderMarkFailedSerializer",
    "OrderMarkPaidSerializer",
    "OrderSerializer",
    "OrderStatusUpdateSerializer",
    "PaymentAttemptSerializer",
]
