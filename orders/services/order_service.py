# orders/services/order_service.py

"""
ORDER SERVICE

Purpose:
- Place an order atomically (stock, totals, numbers, customer upsert)
- Move order_status through the lifecycle (cancel restores stock)
- Record payment outcomes idempotently

Rules:
- Money is computed server-side from Product.final_rate (never trusted
  from the client)
- Placement is all-or-nothing: any failure leaves stock, customers and
  orders untouched
- Marking an already-paid order paid again is a no-op
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from cart.services.cart import assert_minimum_order
from orders.models import Customer, Order, OrderItem
from orders.services import order_lifecycle
from orders.services.exceptions import OrderError
from orders.services.numbering import next_challan_number
from products.services.pricing import line_total, money
from products.services.stock import reserve_stock, restore_stock, to_int_qty

logger = logging.getLogger(__name__)


# =====================================================
# HELPERS
# =====================================================

def normalize_phone(phone: str) -> str:
    raw = (phone or "").strip()
    digits = "".join(ch for ch in raw if ch.isdigit())
    if raw.startswith("+"):
        return f"+{digits}"
    return digits


def _normalize_lines(items) -> list[tuple[str, int]]:
    lines = []
    for item in items or []:
        code = str(item.get("product_code") or "").strip().upper()
        qty = to_int_qty(item.get("quantity"))
        if not code:
            raise OrderError("Each item needs a product_code")
        if qty <= 0:
            raise OrderError(f"Quantity for {code} must be at least 1")
        lines.append((code, qty))
    if not lines:
        raise OrderError("An order needs at least one item")
    return lines


def _upsert_customer(*, name, email, phone, address) -> Customer:
    customer = Customer.objects.select_for_update().filter(phone=phone).first()
    if customer is None:
        customer = Customer.objects.create(
            name=name,
            email=email,
            phone=phone,
            address=address,
            total_orders=1,
        )
        return customer

    customer.name = name or customer.name
    customer.email = email or customer.email
    customer.address = address or customer.address
    customer.total_orders = F("total_orders") + 1
    customer.save(update_fields=["name", "email", "address", "total_orders", "updated_at"])
    customer.refresh_from_db()
    return customer


# =====================================================
# PLACEMENT
# =====================================================

CHALLAN_ATTEMPTS = 3


def _create_order(**fields) -> Order:
    for attempt in range(1, CHALLAN_ATTEMPTS + 1):
        number = next_challan_number()
        try:
            with transaction.atomic():
                return Order.objects.create(challan_number=number, **fields)
        except IntegrityError:
            if attempt == CHALLAN_ATTEMPTS:
                raise
            logger.warning(
                "Challan number already taken; retrying",
                extra={"challan_number": number, "attempt": attempt},
            )


@transaction.atomic
def place_order(
    *,
    customer: dict,
    items,
    payment_method: str = Order.PAYMENT_METHOD_ONLINE,
    user=None,
    enforce_minimum: bool = True,
) -> Order:
    """
    customer: {name, email, phone, address}
    items: iterable of {product_code, quantity}
    """
    if payment_method not in dict(Order.PAYMENT_METHOD_CHOICES):
        raise OrderError(f"Unsupported payment method: {payment_method}")

    name = (customer.get("name") or "").strip()
    phone = normalize_phone(customer.get("phone"))
    if not name or not phone:
        raise OrderError("Customer name and phone are required")

    lines = _normalize_lines(items)

    # locks + validates + decrements; raises before any write on shortfall
    products = reserve_stock(lines)

    merged: dict[str, int] = {}
    for code, qty in lines:
        merged[code] = merged.get(code, 0) + qty

    total = money(sum((line_total(products[c].final_rate, q) for c, q in merged.items()), Decimal("0.00")))

    if enforce_minimum:
        assert_minimum_order(total)

    cust = _upsert_customer(
        name=name,
        email=(customer.get("email") or "").strip(),
        phone=phone,
        address=(customer.get("address") or "").strip(),
    )

    order = _create_order(
        customer=cust,
        placed_by=user if user is not None and user.is_authenticated else None,
        customer_name=name,
        customer_email=(customer.get("email") or "").strip(),
        customer_phone=phone,
        customer_address=(customer.get("address") or "").strip(),
        total_amount=total,
        payment_method=payment_method,
        payment_status=Order.PAYMENT_PENDING,
        order_status=Order.STATUS_CONFIRMED,
        status_updated_at=timezone.now(),
    )

    for code, qty in merged.items():
        p = products[code]
        OrderItem.objects.create(
            order=order,
            product=p,
            product_code=p.product_code,
            product_name=p.product_name,
            quantity=qty,
            unit_price=p.final_rate,
        )

    logger.info(
        "Order placed",
        extra={
            "order_number": order.order_number,
            "total": str(total),
            "payment_method": payment_method,
            "lines": len(merged),
        },
    )
    return order


# =====================================================
# ORDER STATUS
# =====================================================

@transaction.atomic
def update_order_status(order: Order, *, order_status: str | None = None, tracking_notes: str | None = None) -> Order:
    locked = Order.objects.select_for_update().get(pk=order.pk)
    fields = ["updated_at"]

    if order_status and order_status != locked.order_status:
        order_lifecycle.validate_transition(order=locked, target_status=order_status)

        if order_status == Order.STATUS_CANCELLED:
            restore_stock((i.product_code, i.quantity) for i in locked.items.all())

        locked.order_status = order_status
        locked.status_updated_at = timezone.now()
        fields += ["order_status", "status_updated_at"]

    if tracking_notes is not None:
        locked.tracking_notes = tracking_notes
        fields.append("tracking_notes")

    locked.save(update_fields=fields)
    logger.info(
        "Order status updated",
        extra={"order_number": locked.order_number, "order_status": locked.order_status},
    )
    return locked


def cancel_order(order: Order) -> Order:
    return update_order_status(order, order_status=Order.STATUS_CANCELLED)


# =====================================================
# PAYMENT STATUS
# =====================================================

@transaction.atomic
def mark_order_paid(order: Order, *, payment_id: str = "") -> Order:
    """
    Idempotent. Adds the order total to the customer's total_spent once.
    """
    locked = Order.objects.select_for_update().get(pk=order.pk)
    if locked.payment_status == Order.PAYMENT_PAID:
        return locked

    order_lifecycle.validate_payment_transition(order=locked, target_status=Order.PAYMENT_PAID)

    locked.payment_status = Order.PAYMENT_PAID
    locked.paid_at = timezone.now()
    if payment_id:
        locked.payment_id = payment_id
    locked.save(update_fields=["payment_status", "paid_at", "payment_id", "updated_at"])

    if locked.customer_id:
        Customer.objects.filter(pk=locked.customer_id).update(
            total_spent=F("total_spent") + locked.total_amount
        )

    logger.info("Order paid", extra={"order_number": locked.order_number})
    return locked


@transaction.atomic
def mark_order_failed(order: Order, *, reason: str = "") -> Order:
    """
    Paid orders are never downgraded; a late failure event is ignored.
    """
    locked = Order.objects.select_for_update().get(pk=order.pk)
    if locked.payment_status in (Order.PAYMENT_FAILED, Order.PAYMENT_PAID):
        return locked

    order_lifecycle.validate_payment_transition(order=locked, target_status=Order.PAYMENT_FAILED)
    locked.payment_status = Order.PAYMENT_FAILED
    locked.save(update_fields=["payment_status", "updated_at"])

    logger.warning(
        "Order payment failed",
        extra={"order_number": locked.order_number, "reason": reason},
    )
    return locked


@transaction.atomic
def reset_payment_pending(order: Order) -> Order:
    locked = Order.objects.select_for_update().get(pk=order.pk)
    if locked.payment_status == Order.PAYMENT_PENDING:
        return locked
    order_lifecycle.validate_payment_transition(order=locked, target_status=Order.PAYMENT_PENDING)
    locked.payment_status = Order.PAYMENT_PENDING
    locked.save(update_fields=["payment_status", "updated_at"])
    return locked


# =====================================================
# DELETE
# =====================================================

@transaction.atomic
def delete_order(order: Order) -> None:
    """
    Hard delete from the admin console. Orders still in fulfilment give
    their stock back; cancelled orders already did, delivered ones shipped it.
    """
    locked = Order.objects.select_for_update().get(pk=order.pk)
    if locked.order_status not in order_lifecycle.TERMINAL_STATES:
        restore_stock((i.product_code, i.quantity) for i in locked.items.all())

    number = locked.order_number
    locked.delete()
    logger.info("Order deleted", extra={"order_number": number})
