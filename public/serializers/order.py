# public/serializers/order.py

"""
Order tracking shapes for anonymous customers.
Email and address are never part of these.
"""

from rest_framework import serializers

from orders.models import Order, OrderItem
from orders.services import order_lifecycle


class TrackedOrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["product_code", "product_name", "quantity", "unit_price", "total_price"]


class TrackedOrderSerializer(serializers.ModelSerializer):
    items = TrackedOrderItemSerializer(many=True, read_only=True)
    order_status_label = serializers.CharField(source="get_order_status_display", read_only=True)
    timeline = serializers.SerializerMethodField()
    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "order_number",
            "challan_number",
            "customer_name",
            "order_status",
            "order_status_label",
            "payment_status",
            "payment_method",
            "total_amount",
            "tracking_notes",
            "timeline",
            "items",
            "created_at",
            "status_updated_at",
        ]

    def get_timeline(self, obj) -> list:
        return order_lifecycle.timeline(obj)

    def get_customer_name(self, obj) -> str:
        # first name only
        return (obj.customer_name or "").split(" ")[0]


class OrderDocumentRequestSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=32)
