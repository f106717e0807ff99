# orders/services/dashboard.py

"""
ADMIN DASHBOARD STATS

Definitions:
- totalRevenue: sum of total_amount for PAID orders (cancelled included;
  a paid order stays revenue until refunded outside this system)
- pendingOrders: orders still at "confirmed"
- recentOrders: latest 5 by created_at
"""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Sum

from orders.models import Customer, Order
from products.models import Product
from products.services.pricing import money

RECENT_ORDERS_LIMIT = 5


def dashboard_stats() -> dict:
    revenue = (
        Order.objects.filter(payment_status=Order.PAYMENT_PAID)
        .aggregate(total=Sum("total_amount"))
        .get("total")
    )

    return {
        "totalRevenue": money(revenue or Decimal("0.00")),
        "totalOrders": Order.objects.count(),
        "activeProducts": Product.objects.filter(status=Product.STATUS_ACTIVE).count(),
        "totalCustomers": Customer.objects.count(),
        "pendingOrders": Order.objects.filter(order_status=Order.STATUS_CONFIRMED).count(),
        "recentOrders": list(Order.objects.order_by("-created_at")[:RECENT_ORDERS_LIMIT]),
    }
