# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for the admin console and the storefront.
- final_rate is optional on write; when omitted (or when mrp/discount
  change without it) it is recomputed from mrp and discount.
"""

from rest_framework import serializers

from products.models import Category, Product
from products.services.pricing import compute_final_rate, money


class ProductSerializer(serializers.ModelSerializer):
    """
    GUARANTEES:
    - product_code is stored upper-cased and unique
    - final_rate never exceeds mrp
    - stock is a whole number >= 0
    """

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    final_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    savings = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "product_code",
            "product_name",
            "category",
            "category_name",
            "description",
            "content",
            "user_for",
            "mrp",
            "discount",
            "final_rate",
            "savings",
            "stock",
            "image_url",
            "video_url",
            "rating",
            "reviews_count",
            "status",
            "featured",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "category_name", "savings", "created_at", "updated_at"]

    def validate_product_code(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("Product code is required")

        qs = Product.objects.filter(product_code=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A product with this code already exists")
        return value

    def validate_product_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Product name is required")
        return value

    def validate(self, attrs):
        inst = self.instance

        mrp = attrs.get("mrp", getattr(inst, "mrp", None))
        discount = attrs.get("discount", getattr(inst, "discount", 0))

        if mrp is None:
            raise serializers.ValidationError({"mrp": "MRP is required"})

        pricing_changed = "mrp" in attrs or "discount" in attrs
        final_rate = attrs.get("final_rate")

        if final_rate is None and (inst is None or pricing_changed or "final_rate" in attrs):
            attrs["final_rate"] = compute_final_rate(mrp, discount)
        elif final_rate is not None:
            attrs["final_rate"] = money(final_rate)

        effective = attrs.get("final_rate", getattr(inst, "final_rate", None))
        if effective is not None and money(effective) > money(mrp):
            raise serializers.ValidationError({"final_rate": "Final rate cannot exceed MRP"})

        return attrs


class ProductBulkStatusSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    status = serializers.ChoiceField(choices=Product.STATUS_CHOICES)


class ProductBulkFeaturedSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    featured = serializers.BooleanField()
