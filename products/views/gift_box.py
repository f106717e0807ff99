# products/views/gift_box.py

from rest_framework import viewsets

from permissions.roles import CapabilityByActionMixin
from products.models import GiftBox
from products.serializers.gift_box import GiftBoxSerializer


class GiftBoxViewSet(CapabilityByActionMixin, viewsets.ModelViewSet):
    """
    Gift box CRUD for the admin console. The storefront reads active
    boxes through the public catalog.
    """

    queryset = GiftBox.objects.all()
    serializer_class = GiftBoxSerializer
    filterset_fields = ["status"]
    search_fields = ["title", "description", "badge"]
    ordering_fields = ["display_order", "price", "created_at"]
    ordering = ["display_order", "-created_at"]
