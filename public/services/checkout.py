# public/services/checkout.py

"""
STOREFRONT CHECKOUT ORCHESTRATOR

Flow:
1) resolve lines (explicit items, else the caller's server cart)
2) place the order (stock, totals, minimum order, customer upsert)
3) clear the caller's cart
4) online: create a Razorpay order + PaymentAttempt, return the
   checkout payload; manual: return bank/QR details

Rules:
- Step 2 is atomic on its own; a gateway failure in step 4 leaves the
  order placed with payment pending and the attempt recorded as failed,
  so the customer can retry or pay manually.
- Online checkout is refused up front when Razorpay is not configured.
"""

from __future__ import annotations

import logging

from django.conf import settings

from cart.services import cart as cart_service
from cart.services.exceptions import EmptyCartError
from content.services.payment_settings import public_payment_info, razorpay_credentials
from orders.models import Order, PaymentAttempt
from orders.services.exceptions import PaymentError
from orders.services.order_service import place_order, reset_payment_pending
from public.services import razorpay
from public.services.razorpay import RazorpayError

logger = logging.getLogger(__name__)


class PaymentsUnavailableError(PaymentError):
    """Online payment requested while the gateway is disabled."""


class GatewayError(PaymentError):
    """Gateway call failed after the order was placed."""

    def __init__(self, message: str, *, order: Order, attempt: PaymentAttempt):
        super().__init__(message)
        self.order = order
        self.attempt = attempt


def _lines_from_cart(cart) -> list[dict]:
    if cart is None:
        return []
    return [
        {"product_code": i.product.product_code, "quantity": i.quantity}
        for i in cart.items.select_related("product")
    ]


def order_summary(order: Order) -> dict:
    return {
        "order_number": order.order_number,
        "challan_number": order.challan_number,
        "total_amount": str(order.total_amount),
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "order_status": order.order_status,
    }


# =====================================================
# GATEWAY
# =====================================================

def start_online_payment(order: Order, *, creds: dict | None = None) -> dict:
    """
    Create a Razorpay order for `order` and return the checkout payload.
    Raises GatewayError (attempt stored as failed) when the gateway fails.
    """
    creds = creds or razorpay_credentials()

    try:
        gateway_order = razorpay.create_order(
            key_id=creds["key_id"],
            key_secret=creds["key_secret"],
            amount=order.total_amount,
            currency=creds["currency"],
            receipt=order.order_number,
            notes={"order_number": order.order_number, "challan_number": order.challan_number or ""},
        )
    except RazorpayError as exc:
        attempt = PaymentAttempt(order=order, amount=order.total_amount, currency=creds["currency"])
        attempt.mark_failed(reason=str(exc))
        attempt.save()
        logger.error(
            "Razorpay order creation failed",
            extra={"order_number": order.order_number, "error": str(exc)},
        )
        raise GatewayError(str(exc), order=order, attempt=attempt) from exc

    attempt = PaymentAttempt.objects.create(
        order=order,
        gateway_order_id=gateway_order["id"],
        amount=order.total_amount,
        currency=creds["currency"],
        provider_payload=gateway_order,
    )

    return {
        "method": Order.PAYMENT_METHOD_ONLINE,
        "key": creds["key_id"],
        "amount": attempt.amount_paise,
        "currency": attempt.currency,
        "order_id": attempt.gateway_order_id,
        "name": getattr(settings, "STORE_NAME", "Hello Crackers"),
        "description": f"Order {order.order_number}",
        "prefill": {
            "name": order.customer_name,
            "email": order.customer_email,
            "contact": order.customer_phone,
        },
        "notes": {"order_number": order.order_number},
    }


def manual_payment_payload() -> dict:
    info = public_payment_info()
    return {
        "method": Order.PAYMENT_METHOD_MANUAL,
        "bank_details": info["bank_details"],
        "payment_qr_code": info["payment_qr_code"],
        "payment_instructions": info["payment_instructions"],
    }


# =====================================================
# CHECKOUT
# =====================================================

def checkout(*, request, customer: dict, payment_method: str, items=None) -> dict:
    """
    Returns {"order": {...}, "payment": {...}}.

    Raises:
    - EmptyCartError, MinimumOrderError, OrderError, InsufficientStockError,
      ProductUnavailableError before anything is written
    - PaymentsUnavailableError when online payments are off
    - GatewayError after the order is placed
    """
    creds = None
    if payment_method == Order.PAYMENT_METHOD_ONLINE:
        creds = razorpay_credentials()
        if not creds["enabled"]:
            raise PaymentsUnavailableError("Online payment is not available. Choose manual payment.")

    cart = None
    user = getattr(request, "user", None)
    if (user is not None and user.is_authenticated) or cart_service.client_id_from_request(request):
        cart = cart_service.get_cart_for_request(request, create=False)

    lines = list(items or []) or _lines_from_cart(cart)
    if not lines:
        raise EmptyCartError("Your cart is empty.")

    order = place_order(
        customer=customer,
        items=lines,
        payment_method=payment_method,
        user=user,
    )

    if cart is not None:
        cart_service.clear_cart(cart)

    if payment_method == Order.PAYMENT_METHOD_ONLINE:
        payment = start_online_payment(order, creds=creds)
    else:
        payment = manual_payment_payload()

    return {"order": order_summary(order), "payment": payment}


def retry_online_payment(order: Order) -> dict:
    """
    New Razorpay order for an unpaid online order (after a failure or a
    closed checkout window). Payment status goes back to pending first.
    """
    if order.payment_status == Order.PAYMENT_PAID:
        raise PaymentError("Order is already paid")
    if order.payment_method != Order.PAYMENT_METHOD_ONLINE:
        raise PaymentError("Order was placed with manual payment")
    if order.order_status == Order.STATUS_CANCELLED:
        raise PaymentError("Order is cancelled")

    creds = razorpay_credentials()
    if not creds["enabled"]:
        raise PaymentsUnavailableError("Online payment is not available. Choose manual payment.")

    order = reset_payment_pending(order)
    return start_online_payment(order, creds=creds)
