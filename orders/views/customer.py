# orders/views/customer.py

"""
CUSTOMER VIEWSET (ADMIN CONSOLE)

Customers are created by order placement; the console lists, edits and
deletes them. Deleting a customer keeps their orders (FK is SET_NULL and
every order carries a snapshot).
"""

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from orders.models import Customer
from orders.serializers import CustomerSerializer, OrderListSerializer
from permissions.roles import CAP_CUSTOMERS_MANAGE, CAP_ORDERS_VIEW, CapabilityByActionMixin


class CustomerViewSet(
    CapabilityByActionMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer

    read_actions = {"list", "retrieve", "orders"}
    read_capability = CAP_ORDERS_VIEW
    write_capability = CAP_CUSTOMERS_MANAGE

    filterset_fields = ["status"]
    search_fields = ["name", "phone", "email"]
    ordering_fields = ["created_at", "name", "total_orders", "total_spent"]
    ordering = ["-created_at"]

    @extend_schema(responses={200: OrderListSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="orders")
    def orders(self, request, pk=None):
        customer = self.get_object()
        qs = customer.orders.prefetch_related("items").order_by("-created_at")
        return Response(OrderListSerializer(qs, many=True).data)
