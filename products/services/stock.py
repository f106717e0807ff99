# products/services/stock.py

"""
STOCK SERVICE

Purpose:
- Reserve (decrement) stock for order lines under row locks.
- Restore stock when an order is cancelled.

Rules:
- Quantities are integer units.
- Must be called inside transaction.atomic (select_for_update needs it).
- All-or-nothing: any shortfall raises before a single row is written.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from django.db import transaction
from django.db.models import F

from products.models import Product
from products.services.exceptions import InsufficientStockError, ProductUnavailableError

logger = logging.getLogger(__name__)


def to_int_qty(value) -> int:
    """
    HARD RULE: quantities are whole units.
    """
    if isinstance(value, bool):
        raise ValueError("quantity must be a whole integer unit")

    if isinstance(value, int):
        return value

    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())

    raise ValueError("quantity must be a whole integer unit")


def _merge_lines(lines) -> dict[str, int]:
    merged: dict[str, int] = defaultdict(int)
    for code, qty in lines:
        merged[str(code).strip().upper()] += int(qty)
    return dict(merged)


@transaction.atomic
def reserve_stock(lines) -> dict[str, Product]:
    """
    lines: iterable of (product_code, quantity)
    Returns {product_code: locked Product}.
    """
    merged = _merge_lines(lines)

    products = {
        p.product_code: p
        for p in Product.objects.select_for_update().filter(product_code__in=list(merged))
    }

    for code, qty in merged.items():
        product = products.get(code)
        if product is None or not product.is_active:
            raise ProductUnavailableError(f"Product {code} is not available")
        if qty <= 0:
            raise ValueError("quantity must be >= 1")
        if int(product.stock) < qty:
            raise InsufficientStockError(
                f"Insufficient stock for {product.product_name}. "
                f"Requested: {qty}, Available: {product.stock}"
            )

    for code, qty in merged.items():
        Product.objects.filter(pk=products[code].pk).update(stock=F("stock") - qty)

    logger.info("Stock reserved", extra={"lines": len(merged)})
    return products


@transaction.atomic
def restore_stock(lines) -> None:
    """
    lines: iterable of (product_code, quantity). Unknown codes (product since
    deleted) are skipped.
    """
    for code, qty in _merge_lines(lines).items():
        if qty <= 0:
            continue
        Product.objects.filter(product_code=code).update(stock=F("stock") + qty)

    logger.info("Stock restored")
