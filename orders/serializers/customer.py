# orders/serializers/customer.py

from rest_framework import serializers

from orders.models import Customer
from orders.services.order_service import normalize_phone


class CustomerSerializer(serializers.ModelSerializer):
    """
    total_orders / total_spent are maintained by order placement and
    payment marking; the console can edit contact details and status only.
    """

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "total_orders",
            "total_spent",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "total_orders", "total_spent", "created_at", "updated_at"]

    def validate_phone(self, value):
        phone = normalize_phone(value)
        if not phone:
            raise serializers.ValidationError("Phone is required")

        qs = Customer.objects.filter(phone=phone)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A customer with this phone already exists")
        return phone
