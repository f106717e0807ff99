# public/serializers/checkout.py

from rest_framework import serializers

from orders.models import Order


class CheckoutItemSerializer(serializers.Serializer):
    product_code = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=1)

    def validate_product_code(self, value: str) -> str:
        return value.strip().upper()


class CheckoutSerializer(serializers.Serializer):
    """
    items is optional; without it the caller's server cart is ordered.
    """

    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32)
    address = serializers.CharField(required=False, allow_blank=True, default="")
    payment_method = serializers.ChoiceField(
        choices=[c for c, _ in Order.PAYMENT_METHOD_CHOICES],
        default=Order.PAYMENT_METHOD_ONLINE,
    )
    items = CheckoutItemSerializer(many=True, required=False)
    client_id = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_phone(self, value: str) -> str:
        digits = "".join(ch for ch in value if ch.isdigit())
        if len(digits) < 10:
            raise serializers.ValidationError("Enter a valid phone number")
        return value.strip()

    def customer(self) -> dict:
        d = self.validated_data
        return {"name": d["name"], "email": d["email"], "phone": d["phone"], "address": d["address"]}


class PaymentVerifySerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField(max_length=128)
    razorpay_payment_id = serializers.CharField(max_length=128)
    razorpay_signature = serializers.CharField(max_length=256)


class PaymentFailureSerializer(serializers.Serializer):
    razorpay_order_id = serializers.CharField(max_length=128)
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    error = serializers.JSONField(required=False)


class PaymentRetrySerializer(serializers.Serializer):
    order_number = serializers.CharField(max_length=32)
    phone = serializers.CharField(max_length=32)
