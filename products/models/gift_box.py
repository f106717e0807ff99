# products/models/gift_box.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from products.services.pricing import gift_box_discount, money


class GiftBox(models.Model):
    """
    Curated combo box sold at a fixed price.

    Rules:
    - price must be strictly below original_price (it's a deal)
    - discount (whole percent) and final_rate are derived on save,
      never trusted from the client
    - features is a list of short selling points
    """

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    original_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    discount = models.PositiveSmallIntegerField(default=0, editable=False)
    final_rate = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"), editable=False
    )

    image_url = models.CharField(max_length=500, blank=True, default="")
    features = models.JSONField(default=list, blank=True)

    badge = models.CharField(max_length=40, blank=True, default="")
    badge_color = models.CharField(max_length=40, blank=True, default="bg-red-500")

    display_order = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "-created_at"]

    def clean(self):
        if self.price is None or self.original_price is None:
            raise ValidationError("price and original_price are required")
        if money(self.price) >= money(self.original_price):
            raise ValidationError({"price": "Price must be less than original price"})
        if not isinstance(self.features or [], list):
            raise ValidationError({"features": "features must be a list"})

    def save(self, *args, **kwargs):
        self.full_clean()
        self.features = [str(f).strip() for f in (self.features or []) if str(f).strip()]
        self.discount = gift_box_discount(self.price, self.original_price)
        self.final_rate = money(self.price)
        super().save(*args, **kwargs)

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    def __str__(self):
        return f"{self.title} ({self.final_rate})"
