# public/services/payments.py

"""
RAZORPAY PAYMENT OUTCOMES

Three entry points, all idempotent and keyed on the Razorpay order id
(PaymentAttempt.gateway_order_id):

- verify_checkout_payment: browser success handler
    (razorpay_order_id, razorpay_payment_id, razorpay_signature)
- record_checkout_failure: browser failure handler
- process_webhook_event: server-to-server events
    payment.captured / order.paid -> paid (amount checked)
    payment.failed                -> failed

Rules:
- A verified attempt / paid order is never downgraded
- Signature or amount mismatches are recorded on the attempt and never
  mark the order paid
"""

from __future__ import annotations

import logging

from django.db import transaction

from content.services.payment_settings import razorpay_credentials
from orders.models import Order, PaymentAttempt
from orders.services.exceptions import PaymentError
from orders.services.order_service import mark_order_failed, mark_order_paid
from public.services.razorpay import verify_payment_signature

logger = logging.getLogger(__name__)

EVENT_PAYMENT_CAPTURED = "payment.captured"
EVENT_ORDER_PAID = "order.paid"
EVENT_PAYMENT_FAILED = "payment.failed"


class UnknownPaymentError(PaymentError):
    """No PaymentAttempt for the given gateway order id."""


class SignatureMismatchError(PaymentError):
    """Checkout signature did not verify."""


def _locked_attempt(gateway_order_id: str) -> PaymentAttempt:
    attempt = (
        PaymentAttempt.objects.select_for_update()
        .select_related("order")
        .filter(gateway_order_id=(gateway_order_id or "").strip())
        .first()
    )
    if attempt is None:
        raise UnknownPaymentError(f"Unknown payment order {gateway_order_id}")
    return attempt


def _save_attempt(attempt: PaymentAttempt) -> None:
    attempt.save(update_fields=["status", "payment_id", "failure_reason", "provider_payload", "verified_at"])


# =====================================================
# BROWSER CALLBACKS
# =====================================================

@transaction.atomic
def _apply_checkout_verification(*, gateway_order_id: str, payment_id: str, signature: str) -> tuple[Order, bool]:
    attempt = _locked_attempt(gateway_order_id)

    if attempt.status == PaymentAttempt.STATUS_VERIFIED:
        return attempt.order, True

    creds = razorpay_credentials()
    ok = verify_payment_signature(
        order_id=attempt.gateway_order_id,
        payment_id=payment_id,
        signature=signature,
        key_secret=creds["key_secret"],
    )

    payload = {"razorpay_order_id": gateway_order_id, "razorpay_payment_id": payment_id}

    if not ok:
        attempt.mark_failed(reason="Signature mismatch", payload=payload)
        _save_attempt(attempt)
        order = mark_order_failed(attempt.order, reason="signature mismatch")
        logger.warning(
            "Razorpay signature mismatch",
            extra={"gateway_order_id": gateway_order_id, "order_number": order.order_number},
        )
        return order, False

    attempt.mark_verified(payment_id=payment_id, payload=payload)
    _save_attempt(attempt)
    order = mark_order_paid(attempt.order, payment_id=payment_id)

    logger.info(
        "Razorpay payment verified",
        extra={"gateway_order_id": gateway_order_id, "order_number": order.order_number},
    )
    return order, True


def verify_checkout_payment(*, gateway_order_id: str, payment_id: str, signature: str) -> Order:
    """
    Raises SignatureMismatchError after the failure has been committed.
    """
    order, ok = _apply_checkout_verification(
        gateway_order_id=gateway_order_id, payment_id=payment_id, signature=signature
    )
    if not ok:
        raise SignatureMismatchError("Payment verification failed")
    return order


@transaction.atomic
def record_checkout_failure(*, gateway_order_id: str, reason: str = "", payload=None) -> Order:
    attempt = _locked_attempt(gateway_order_id)

    if attempt.status == PaymentAttempt.STATUS_VERIFIED:
        return attempt.order

    attempt.mark_failed(reason=reason or "Payment failed", payload=payload)
    _save_attempt(attempt)
    return mark_order_failed(attempt.order, reason=reason)


# =====================================================
# WEBHOOK
# =====================================================

def _entity(payload: dict, name: str) -> dict:
    return ((payload.get("payload") or {}).get(name) or {}).get("entity") or {}


@transaction.atomic
def process_webhook_event(payload: dict) -> dict:
    """
    Returns {"ok": bool, "detail": str}. Unknown events and unknown orders
    are acknowledged (ok) so Razorpay stops retrying them.
    """
    event = str(payload.get("event") or "").strip()
    payment = _entity(payload, "payment")
    order_entity = _entity(payload, "order")

    gateway_order_id = str(payment.get("order_id") or order_entity.get("id") or "").strip()
    if not gateway_order_id:
        return {"ok": True, "detail": "No order id"}

    if event not in (EVENT_PAYMENT_CAPTURED, EVENT_ORDER_PAID, EVENT_PAYMENT_FAILED):
        return {"ok": True, "detail": f"Ignored event {event or '?'}"}

    try:
        attempt = _locked_attempt(gateway_order_id)
    except UnknownPaymentError:
        logger.warning("Webhook for unknown payment order", extra={"gateway_order_id": gateway_order_id})
        return {"ok": True, "detail": "Unknown order"}

    if attempt.status == PaymentAttempt.STATUS_VERIFIED:
        return {"ok": True, "detail": "Already processed"}

    if event == EVENT_PAYMENT_FAILED:
        reason = str(payment.get("error_description") or "Payment failed")
        attempt.mark_failed(reason=reason, payload=payload)
        _save_attempt(attempt)
        mark_order_failed(attempt.order, reason=reason)
        return {"ok": True, "detail": "Marked failed"}

    if event == EVENT_ORDER_PAID:
        paid_paise = order_entity.get("amount_paid", payment.get("amount"))
    else:
        paid_paise = payment.get("amount")

    try:
        paid_paise = int(paid_paise)
    except (TypeError, ValueError):
        paid_paise = None

    if paid_paise != attempt.amount_paise:
        attempt.mark_failed(
            reason=f"Amount mismatch: expected {attempt.amount_paise}, got {paid_paise}",
            payload=payload,
        )
        _save_attempt(attempt)
        logger.error(
            "Razorpay webhook amount mismatch",
            extra={"gateway_order_id": gateway_order_id, "expected": attempt.amount_paise, "got": paid_paise},
        )
        return {"ok": False, "detail": "Amount mismatch"}

    payment_id = str(payment.get("id") or "")
    attempt.mark_verified(payment_id=payment_id, payload=payload)
    _save_attempt(attempt)
    mark_order_paid(attempt.order, payment_id=payment_id)

    logger.info("Razorpay webhook marked order paid", extra={"gateway_order_id": gateway_order_id})
    return {"ok": True, "detail": "Marked paid"}
