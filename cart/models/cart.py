"""
PATH: cart/models/cart.py

CART MODEL

Purpose:
- Storefront cart (server-side, mutable until checkout).
- Owned by a signed-in user OR an anonymous browser (client_id).
- Derive total + item count from CartItems.

Rules:
- One cart per user; one cart per anonymous client_id.
- At least one owner reference is required.
- Emptied (not deleted) when an order is placed from it.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from products.services.pricing import money

User = settings.AUTH_USER_MODEL


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="carts",
    )

    client_id = models.CharField(
        max_length=64,
        blank=True,
        default="",
        db_index=True,
        help_text="Anonymous browser identifier (X-Client-Id header).",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=models.Q(user__isnull=False),
                name="one_cart_per_user",
            ),
            models.UniqueConstraint(
                fields=["client_id"],
                condition=models.Q(user__isnull=True) & ~models.Q(client_id=""),
                name="one_cart_per_anonymous_client",
            ),
            models.CheckConstraint(
                condition=models.Q(user__isnull=False) | ~models.Q(client_id=""),
                name="cart_has_owner",
            ),
        ]

    def clean(self):
        if self.user_id is None and not (self.client_id or "").strip():
            raise ValidationError("A cart needs a user or a client_id")

    def save(self, *args, **kwargs):
        self.client_id = (self.client_id or "").strip()
        self.full_clean()
        return super().save(*args, **kwargs)

    # ---- derived totals (never stored) ----

    @property
    def item_count(self) -> int:
        return sum(int(i.quantity or 0) for i in self.items.all())

    @property
    def total_amount(self) -> Decimal:
        return money(sum((i.line_total for i in self.items.all()), Decimal("0.00")))

    @property
    def is_empty(self) -> bool:
        return not self.items.exists()

    def __str__(self):
        owner = self.user or f"client:{self.client_id}"
        return f"Cart {self.id} | {owner}"
