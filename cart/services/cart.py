# cart/services/cart.py

"""
CART SERVICE

Purpose:
- Resolve the cart owner (user or anonymous client_id)
- Mutate cart lines with the storefront rules

Rules:
- Adding an existing product increments its line (never a duplicate line)
  and refreshes the price snapshot
- A quantity that reaches 0 removes the line
- Only active products can be added
- Totals are always derived: total = sum(unit_price * quantity)
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from cart.models import Cart, CartItem
from cart.services.exceptions import CartOwnerRequiredError, MinimumOrderError
from content.services.site_settings import minimum_order_amount
from products.models import Product
from products.services.exceptions import ProductUnavailableError
from products.services.pricing import money

logger = logging.getLogger(__name__)

CLIENT_ID_HEADER = "HTTP_X_CLIENT_ID"
MAX_CLIENT_ID_LENGTH = 64


# =====================================================
# OWNER RESOLUTION
# =====================================================

def client_id_from_request(request) -> str:
    raw = request.META.get(CLIENT_ID_HEADER) or ""
    if not raw:
        raw = request.query_params.get("client_id") or ""
    if not raw and isinstance(request.data, dict):
        raw = request.data.get("client_id") or ""
    return str(raw).strip()[:MAX_CLIENT_ID_LENGTH]


def get_cart_for_request(request, *, create: bool = True) -> Cart | None:
    """
    Signed-in users own their cart by user; anonymous browsers by client_id.
    Raises CartOwnerRequiredError when neither is available.
    """
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return get_cart(user=user, create=create)

    client_id = client_id_from_request(request)
    if not client_id:
        raise CartOwnerRequiredError("Send an X-Client-Id header or sign in to use the cart.")
    return get_cart(client_id=client_id, create=create)


def get_cart(*, user=None, client_id: str = "", create: bool = True) -> Cart | None:
    if user is not None:
        lookup = {"user": user}
    else:
        lookup = {"user__isnull": True, "client_id": client_id}

    cart = Cart.objects.filter(**lookup).first()
    if cart is None and create:
        cart = Cart.objects.create(user=user, client_id="" if user is not None else client_id)
    return cart


# =====================================================
# MUTATORS
# =====================================================

def _active_product(product_code: str) -> Product:
    code = (product_code or "").strip().upper()
    product = Product.objects.filter(product_code=code).first()
    if product is None or not product.is_active:
        raise ProductUnavailableError(f"Product {code or '?'} is not available")
    return product


@transaction.atomic
def add_item(cart: Cart, *, product_code: str, quantity: int = 1) -> CartItem:
    quantity = int(quantity)
    if quantity <= 0:
        raise ValueError("quantity must be greater than zero")

    product = _active_product(product_code)

    item = CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
    if item is None:
        item = CartItem.objects.create(
            cart=cart,
            product=product,
            quantity=quantity,
            unit_price=product.final_rate,
        )
    else:
        item.quantity = int(item.quantity) + quantity
        item.unit_price = product.final_rate
        item.save(update_fields=["quantity", "unit_price", "updated_at"])

    Cart.objects.filter(pk=cart.pk).update(updated_at=item.updated_at)
    return item


def _line(cart: Cart, product_code: str) -> CartItem | None:
    code = (product_code or "").strip().upper()
    return (
        CartItem.objects.select_for_update()
        .filter(cart=cart, product__product_code=code)
        .first()
    )


@transaction.atomic
def set_quantity(cart: Cart, *, product_code: str, quantity: int) -> CartItem | None:
    """
    quantity <= 0 removes the line. Returns the line, or None when removed.
    """
    quantity = int(quantity)
    item = _line(cart, product_code)

    if quantity <= 0:
        if item is not None:
            item.delete()
        return None

    if item is None:
        return add_item(cart, product_code=product_code, quantity=quantity)

    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def decrement_item(cart: Cart, *, product_code: str) -> CartItem | None:
    """
    Remove one unit. Removing the last unit removes the line.
    """
    item = _line(cart, product_code)
    if item is None:
        return None

    if int(item.quantity) <= 1:
        item.delete()
        return None

    item.quantity = int(item.quantity) - 1
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def remove_item(cart: Cart, *, product_code: str) -> bool:
    item = _line(cart, product_code)
    if item is None:
        return False
    item.delete()
    return True


def clear_cart(cart: Cart) -> None:
    deleted, _ = cart.items.all().delete()
    logger.info("Cart cleared", extra={"cart_id": str(cart.id), "rows": deleted})


# =====================================================
# SUMMARY / MINIMUM ORDER
# =====================================================

def cart_summary(cart: Cart) -> dict:
    items = list(cart.items.select_related("product").all())
    total = money(sum((i.line_total for i in items), Decimal("0.00")))
    minimum = minimum_order_amount()
    return {
        "item_count": sum(int(i.quantity) for i in items),
        "total": total,
        "minimum_order": minimum,
        "meets_minimum": total >= minimum,
    }


def assert_minimum_order(total) -> None:
    minimum = minimum_order_amount()
    total = money(total)
    if total < minimum:
        raise MinimumOrderError(
            f"Minimum order amount is ₹{minimum}. Current total is ₹{total}.",
            minimum=minimum,
            total=total,
        )
