# orders/serializers/order.py

"""
ORDER SERIALIZERS (ADMIN CONSOLE)

Orders are read-mostly here. Writes go through the lifecycle actions
(status, mark-paid, mark-failed); no serializer writes order_status or
payment_status directly.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem, PaymentAttempt
from orders.services import order_lifecycle


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_code",
            "product_name",
            "quantity",
            "unit_price",
            "total_price",
        ]
        read_only_fields = fields


class PaymentAttemptSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentAttempt
        fields = [
            "id",
            "provider",
            "gateway_order_id",
            "payment_id",
            "amount",
            "currency",
            "status",
            "failure_reason",
            "initiated_at",
            "verified_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "challan_number",
            "customer_name",
            "customer_phone",
            "total_amount",
            "payment_method",
            "payment_status",
            "order_status",
            "item_count",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_count(self, obj) -> int:
        return sum(i.quantity for i in obj.items.all())


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    payment_attempts = PaymentAttemptSerializer(many=True, read_only=True)
    document_title = serializers.CharField(read_only=True)
    timeline = serializers.SerializerMethodField()
    allowed_statuses = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "challan_number",
            "customer",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_address",
            "total_amount",
            "payment_method",
            "payment_status",
            "payment_id",
            "paid_at",
            "order_status",
            "tracking_notes",
            "status_updated_at",
            "document_title",
            "timeline",
            "allowed_statuses",
            "items",
            "payment_attempts",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_timeline(self, obj) -> list:
        return order_lifecycle.timeline(obj)

    def get_allowed_statuses(self, obj) -> list:
        return sorted(order_lifecycle.ALLOWED_TRANSITIONS.get(obj.order_status, set()))


class OrderStatusUpdateSerializer(serializers.Serializer):
    order_status = serializers.ChoiceField(choices=Order.ORDER_STATUS_CHOICES, required=False)
    tracking_notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if "order_status" not in attrs and "tracking_notes" not in attrs:
            raise serializers.ValidationError("Provide order_status and/or tracking_notes")
        return attrs


class OrderMarkPaidSerializer(serializers.Serializer):
    payment_id = serializers.CharField(required=False, allow_blank=True, default="")


class OrderMarkFailedSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")
