# public/serializers/__init__.py

from .catalog import PublicCategorySerializer, PublicProductSerializer
from .checkout import (
    CheckoutItemSerializer,
    CheckoutSerializer,
    PaymentFailureSerializer,
    PaymentRetrySerializer,
    PaymentVerifySerializer,
)
from .order import OrderDocumentRequestSerializer, TrackedOrderItemSerializer, TrackedOrderSerializer

__all__ = [
    "CheckoutItemSerializer",
    "CheckoutSerializer",
    "OrderDocumentRequestSerializer",
    "PaymentFailureSerializer",
    "PaymentRetrySerializer",
    "PaymentVerifySerializer",
    "PublicCategorySerializer",
    "PublicProductSerializer",
    "TrackedOrderItemSerializer",
    "TrackedOrderSerializer",
]
