# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - name is trimmed and must be unique (case-insensitive)
    - product_count comes from the viewset annotation (0 when absent)
    """

    name = serializers.CharField(required=True, allow_blank=False, max_length=120)
    product_count = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "description",
            "image_url",
            "display_order",
            "status",
            "product_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "product_count", "created_at", "updated_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")

        qs = Category.objects.filter(name__iexact=v)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A category with this name already exists")
        return v

    def get_product_count(self, obj) -> int:
        return int(getattr(obj, "product_count", 0) or 0)
