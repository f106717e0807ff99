# orders/models/payment_attempt.py

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class PaymentAttempt(models.Model):
    """
    One Razorpay order created for an Order.

    Idempotency rule:
    - gateway_order_id is unique (Razorpay order id)
    - verify/webhook processing is keyed on it and safe to repeat
    """

    PROVIDER_RAZORPAY = "razorpay"
    PROVIDER_CHOICES = [
        (PROVIDER_RAZORPAY, "Razorpay"),
    ]

    STATUS_INITIATED = "initiated"
    STATUS_VERIFIED = "verified"
    STATUS_FAILED = "failed"

    STATUS_CHOICES = [
        (STATUS_INITIATED, "Initiated"),
        (STATUS_VERIFIED, "Verified"),
        (STATUS_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="payment_attempts",
    )

    provider = models.CharField(max_length=32, choices=PROVIDER_CHOICES, default=PROVIDER_RAZORPAY)

    gateway_order_id = models.CharField(
        max_length=128,
        unique=True,
        null=True,
        blank=True,
        help_text="Razorpay order id. NULL when order creation itself failed.",
    )
    payment_id = models.CharField(max_length=128, blank=True, default="")

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=8, default="INR")

    status = models.CharField(max_length=32, choices=STATUS_CHOICES, default=STATUS_INITIATED)
    failure_reason = models.CharField(max_length=255, blank=True, default="")

    provider_payload = models.JSONField(default=dict, blank=True)

    initiated_at = models.DateTimeField(auto_now_add=True)
    verified_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-initiated_at"]
        indexes = [
            models.Index(fields=["status"], name="payattempt_status_idx"),
            models.Index(fields=["order", "initiated_at"], name="payattempt_order_idx"),
        ]

    @property
    def amount_paise(self) -> int:
        return int((self.amount * 100).to_integral_value())

    def mark_verified(self, *, payment_id: str = "", payload=None):
        self.status = self.STATUS_VERIFIED
        self.verified_at = self.verified_at or timezone.now()
        if payment_id:
            self.payment_id = payment_id
        if payload is not None:
            self.provider_payload = payload

    def mark_failed(self, *, reason: str = "", payload=None):
        self.status = self.STATUS_FAILED
        self.failure_reason = (reason or "")[:255]
        if payload is not None:
            self.provider_payload = payload

    def __str__(self):
        return f"{self.provider}:{self.gateway_order_id or '-'} | {self.status}"
