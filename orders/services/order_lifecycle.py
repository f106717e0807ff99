"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed transitions for Order.order_status
and Order.payment_status.

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth
"""

from orders.models import Order
from orders.services.exceptions import InvalidOrderTransitionError

# ============================================================
# ORDER STATUS
# ============================================================

FULFILMENT_SEQUENCE = [
    Order.STATUS_CONFIRMED,
    Order.STATUS_FACTORY,
    Order.STATUS_DISPATCHED,
    Order.STATUS_TRANSPORT,
    Order.STATUS_DELIVERED,
]

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}


def _forward_targets(status: str) -> set[str]:
    if status not in FULFILMENT_SEQUENCE:
        return set()
    idx = FULFILMENT_SEQUENCE.index(status)
    return set(FULFILMENT_SEQUENCE[idx + 1:])


ALLOWED_TRANSITIONS = {
    status: _forward_targets(status) | {Order.STATUS_CANCELLED}
    for status in FULFILMENT_SEQUENCE
    if status not in TERMINAL_STATES
}


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(from_status=order.order_status, to_status=target_status):
        raise InvalidOrderTransitionError(
            f"Order {order.order_number} cannot move from "
            f"'{order.order_status}' to '{target_status}'"
        )


# ============================================================
# PAYMENT STATUS
# ============================================================

PAYMENT_TERMINAL_STATES = {
    Order.PAYMENT_PAID,
}

ALLOWED_PAYMENT_TRANSITIONS = {
    Order.PAYMENT_PENDING: {Order.PAYMENT_PAID, Order.PAYMENT_FAILED},
    Order.PAYMENT_FAILED: {Order.PAYMENT_PAID, Order.PAYMENT_PENDING},
}


def can_transition_payment(*, from_status: str, to_status: str) -> bool:
    if from_status in PAYMENT_TERMINAL_STATES:
        return False

    return to_status in ALLOWED_PAYMENT_TRANSITIONS.get(from_status, set())


def validate_payment_transition(*, order: Order, target_status: str):
    if not can_transition_payment(from_status=order.payment_status, to_status=target_status):
        raise InvalidOrderTransitionError(
            f"Order {order.order_number} payment cannot move from "
            f"'{order.payment_status}' to '{target_status}'"
        )


# ============================================================
# TRACKING TIMELINE
# ============================================================

def timeline(order: Order) -> list[dict]:
    """
    Customer-facing steps. Cancelled orders show only the placed step
    and the cancellation.
    """
    labels = dict(Order.ORDER_STATUS_CHOICES)

    if order.order_status == Order.STATUS_CANCELLED:
        return [
            {"status": Order.STATUS_CONFIRMED, "label": labels[Order.STATUS_CONFIRMED], "completed": True, "current": False},
            {"status": Order.STATUS_CANCELLED, "label": labels[Order.STATUS_CANCELLED], "completed": True, "current": True},
        ]

    current_idx = FULFILMENT_SEQUENCE.index(order.order_status)
    return [
        {
            "status": status,
            "label": labels[status],
            "completed": idx <= current_idx,
            "current": idx == current_idx,
        }
        for idx, status in enumerate(FULFILMENT_SEQUENCE)
    ]
