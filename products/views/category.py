# products/views/category.py

from django.db.models import Count
from rest_framework import viewsets

from permissions.roles import CapabilityByActionMixin
from products.models import Category
from products.serializers.category import CategorySerializer


class CategoryViewSet(CapabilityByActionMixin, viewsets.ModelViewSet):
    """
    Category API (admin console)

    Policy:
    - catalog.view can list/retrieve (product forms need the dropdown)
    - catalog.edit can create/update/delete
    - deleting a category keeps its products (category is set to NULL)
    """

    serializer_class = CategorySerializer
    filterset_fields = ["status"]
    search_fields = ["name", "description"]
    ordering_fields = ["display_order", "name", "created_at"]
    ordering = ["display_order", "name"]

    def get_queryset(self):
        return Category.objects.annotate(product_count=Count("products"))
