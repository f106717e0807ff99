# cart/serializers/cart.py

from rest_framework import serializers

from cart.models import Cart, CartItem
from cart.services.cart import cart_summary


class CartItemSerializer(serializers.ModelSerializer):
    product_code = serializers.CharField(source="product.product_code", read_only=True)
    product_name = serializers.CharField(source="product.product_name", read_only=True)
    image_url = serializers.CharField(source="product.image_url", read_only=True)
    content = serializers.CharField(source="product.content", read_only=True)
    mrp = serializers.DecimalField(source="product.mrp", max_digits=10, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_code",
            "product_name",
            "image_url",
            "content",
            "mrp",
            "unit_price",
            "quantity",
            "line_total",
        ]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    """
    Cart + derived summary. Nothing here is stored; totals are recomputed
    from the lines on every read.
    """

    items = CartItemSerializer(many=True, read_only=True)
    summary = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ["id", "items", "summary", "updated_at"]
        read_only_fields = fields

    def get_summary(self, obj) -> dict:
        s = cart_summary(obj)
        return {
            "item_count": s["item_count"],
            "total": str(s["total"]),
            "minimum_order": str(s["minimum_order"]),
            "meets_minimum": s["meets_minimum"],
        }


class CartAddItemSerializer(serializers.Serializer):
    product_code = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartQuantitySerializer(serializers.Serializer):
    # <= 0 removes the line
    quantity = serializers.IntegerField()


class QuotationRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=120, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
