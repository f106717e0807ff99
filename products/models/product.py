# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from products.services.pricing import compute_final_rate, money

from .category import Category


class Product(models.Model):
    """
    Represents a sellable cracker item.

    PRICING MODEL (IMPORTANT):
    - mrp is the printed price
    - discount is a percentage (0-100) off mrp
    - final_rate is what the customer pays per unit
    - final_rate is derived from mrp/discount unless set explicitly
      (bulk price lists sometimes carry a hand-rounded rate)
    - final_rate can never exceed mrp

    STOCK MODEL:
    - stock is a plain unit count on the product
    - decremented when an order is placed, restored when it is cancelled
    """

    USER_FOR_FAMILY = "Family"
    USER_FOR_ADULT = "Adult"
    USER_FOR_KIDS = "Kids"

    USER_FOR_CHOICES = [
        (USER_FOR_FAMILY, "Family"),
        (USER_FOR_ADULT, "Adult"),
        (USER_FOR_KIDS, "Kids"),
    ]

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product_code = models.CharField(max_length=64, unique=True, db_index=True)
    product_name = models.CharField(max_length=255, db_index=True)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    description = models.TextField(blank=True, default="")
    content = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Pack content, e.g. '10 pcs' or '1 box'",
    )
    user_for = models.CharField(
        max_length=16, choices=USER_FOR_CHOICES, default=USER_FOR_FAMILY
    )

    mrp = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00")), MaxValueValidator(Decimal("100.00"))],
        help_text="Percent off MRP",
    )
    final_rate = models.DecimalField(max_digits=10, decimal_places=2, blank=True)

    stock = models.PositiveIntegerField(default=0)

    image_url = models.CharField(max_length=500, blank=True, default="")
    video_url = models.CharField(max_length=500, blank=True, default="")

    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0.0"),
        validators=[MinValueValidator(Decimal("0.0")), MaxValueValidator(Decimal("5.0"))],
    )
    reviews_count = models.PositiveIntegerField(default=0)

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True
    )
    featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category__display_order", "product_name"]
        indexes = [
            models.Index(fields=["status", "featured"], name="product_status_featured_idx"),
        ]

    def __str__(self):
        return f"{self.product_name} ({self.product_code})"

    def clean(self):
        if self.mrp is None or Decimal(self.mrp) < 0:
            raise ValidationError({"mrp": "MRP must be zero or more"})

        discount = Decimal(self.discount if self.discount is not None else 0)
        if discount < 0 or discount > 100:
            raise ValidationError({"discount": "Discount must be between 0 and 100"})

        if self.final_rate is not None and money(self.final_rate) > money(self.mrp):
            raise ValidationError({"final_rate": "Final rate cannot exceed MRP"})

    def save(self, *args, **kwargs):
        self.product_code = (self.product_code or "").strip().upper()
        self.product_name = (self.product_name or "").strip()
        if self.final_rate in (None, ""):
            self.final_rate = compute_final_rate(self.mrp, self.discount)
        super().save(*args, **kwargs)

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    @property
    def savings(self) -> Decimal:
        return money(Decimal(self.mrp or 0) - Decimal(self.final_rate or 0))
