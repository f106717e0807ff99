# orders/urls.py

"""
ORDERS API URLS

Mounted at /api/orders/:
    dashboard/
    orders/                      list / retrieve / delete
    orders/<id>/status/          status + tracking notes
    orders/<id>/mark-paid/
    orders/<id>/mark-failed/
    orders/<id>/challan/         PDF
    customers/                   list / retrieve / update / delete
    customers/<id>/orders/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from orders.views import CustomerViewSet, DashboardView, OrderViewSet

router = DefaultRouter()
router.register(r"orders", OrderViewSet, basename="orders")
router.register(r"customers", CustomerViewSet, basename="customers")

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="orders-dashboard"),
    path("", include(router.urls)),
]
