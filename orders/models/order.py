# orders/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """
    Storefront order.

    Key rules:
    - order_number is generated once (ORD<yyyymmdd>-<8 hex>) and never changes
    - challan_number is unique; assigned at placement
    - customer_* fields are a snapshot; the Customer row may change later
    - totals are computed server-side from OrderItems
    - order_status / payment_status only move through
      orders.services.order_lifecycle
    """

    PAYMENT_METHOD_ONLINE = "online"
    PAYMENT_METHOD_MANUAL = "manual"

    PAYMENT_METHOD_CHOICES = [
        (PAYMENT_METHOD_ONLINE, "Online (Razorpay)"),
        (PAYMENT_METHOD_MANUAL, "Manual (Bank / QR)"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_PAID = "paid"
    PAYMENT_FAILED = "failed"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_PAID, "Paid"),
        (PAYMENT_FAILED, "Failed"),
    ]

    STATUS_CONFIRMED = "confirmed"
    STATUS_FACTORY = "factory"
    STATUS_DISPATCHED = "dispatched"
    STATUS_TRANSPORT = "transport"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    ORDER_STATUS_CHOICES = [
        (STATUS_CONFIRMED, "Order Confirmed"),
        (STATUS_FACTORY, "At Factory"),
        (STATUS_DISPATCHED, "Dispatched"),
        (STATUS_TRANSPORT, "In Transport"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, blank=True)
    challan_number = models.CharField(max_length=32, unique=True, null=True, blank=True)

    customer = models.ForeignKey(
        "orders.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    placed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    # Customer snapshot
    customer_name = models.CharField(max_length=120)
    customer_email = models.EmailField(blank=True, default="")
    customer_phone = models.CharField(max_length=20, db_index=True)
    customer_address = models.TextField(blank=True, default="")

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    payment_method = models.CharField(
        max_length=16, choices=PAYMENT_METHOD_CHOICES, default=PAYMENT_METHOD_ONLINE
    )
    payment_status = models.CharField(
        max_length=16, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING, db_index=True
    )
    payment_id = models.CharField(max_length=128, blank=True, default="")
    paid_at = models.DateTimeField(null=True, blank=True)

    order_status = models.CharField(
        max_length=16, choices=ORDER_STATUS_CHOICES, default=STATUS_CONFIRMED, db_index=True
    )
    tracking_notes = models.TextField(blank=True, default="")
    status_updated_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="order_created_idx"),
            models.Index(fields=["order_status", "created_at"], name="order_status_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self.order_number:
            prefix = timezone.now().strftime("ORD%Y%m%d")
            self.order_number = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"

        if self.payment_status == self.PAYMENT_PAID and not self.paid_at:
            self.paid_at = timezone.now()

        super().save(*args, **kwargs)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == self.PAYMENT_PAID

    @property
    def document_title(self) -> str:
        return "REMITTANCE & CHALLAN" if self.is_paid else "QUOTATION"

    def __str__(self):
        return f"{self.order_number} | {self.total_amount} | {self.order_status}/{self.payment_status}"
