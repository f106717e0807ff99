# products/urls.py

"""
PRODUCTS URLS

Admin catalog routes under /api/products/:
    categories/
    products/  (+ bulk-status, bulk-featured, import, export, template,
                media-zip, <id>/media)
    gift-boxes/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import CategoryViewSet, GiftBoxViewSet, ProductViewSet

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")
router.register(r"gift-boxes", GiftBoxViewSet, basename="gift-boxes")

urlpatterns = [
    path("", include(router.urls)),
]
