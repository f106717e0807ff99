# orders/admin.py
"""
=====================================================
PATH: orders/admin.py
=====================================================

Django admin for orders.

- order/payment status are read-only here; lifecycle changes go through
  the console API so transition rules and stock restoration apply
"""

from django.contrib import admin

from orders.models import Customer, Order, OrderItem, PaymentAttempt


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "product_code", "product_name", "quantity", "unit_price", "total_price")


class PaymentAttemptInline(admin.TabularInline):
    model = PaymentAttempt
    extra = 0
    can_delete = False
    readonly_fields = (
        "provider",
        "gateway_order_id",
        "payment_id",
        "amount",
        "currency",
        "status",
        "failure_reason",
        "initiated_at",
        "verified_at",
    )
    exclude = ("provider_payload",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "challan_number",
        "customer_name",
        "customer_phone",
        "total_amount",
        "payment_method",
        "payment_status",
        "order_status",
        "created_at",
    )
    list_filter = ("order_status", "payment_status", "payment_method")
    search_fields = ("order_number", "challan_number", "customer_name", "customer_phone")
    readonly_fields = (
        "order_number",
        "challan_number",
        "total_amount",
        "payment_status",
        "order_status",
        "paid_at",
        "status_updated_at",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline, PaymentAttemptInline]
    ordering = ("-created_at",)


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "email", "total_orders", "total_spent", "status")
    list_filter = ("status",)
    search_fields = ("name", "phone", "email")
    readonly_fields = ("total_orders", "total_spent", "created_at", "updated_at")
