# public/serializers/catalog.py

"""
Storefront catalog shapes. Stock is exposed as a number so the UI can
grey out sold-out lines; nothing else internal is.
"""

from rest_framework import serializers

from products.models import Category, Product


class PublicCategorySerializer(serializers.ModelSerializer):
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ["id", "name", "description", "image_url", "display_order", "product_count"]

    def get_product_count(self, obj) -> int:
        return int(getattr(obj, "product_count", 0) or 0)


class PublicProductSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    savings = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    in_stock = serializers.SerializerMethodField()

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
            "in_stock",
            "image_url",
            "video_url",
            "rating",
            "reviews_count",
            "featured",
        ]
        read_only_fields = fields

    def get_in_stock(self, obj) -> bool:
        return obj.stock > 0
