# cart/urls.py

"""
Mounted at /api/cart/:
    ""                          GET cart
    clear/                      POST
    items/                      POST add
    items/<code>/               PATCH quantity, DELETE line
    items/<code>/decrement/     POST
    quotation/                  POST -> PDF
"""

from django.urls import path

from cart.views import (
    CartClearView,
    CartItemDecrementView,
    CartItemDetailView,
    CartItemsView,
    CartQuotationView,
    CartView,
)

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("clear/", CartClearView.as_view(), name="cart-clear"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("items/<str:product_code>/", CartItemDetailView.as_view(), name="cart-item"),
    path("items/<str:product_code>/decrement/", CartItemDecrementView.as_view(), name="cart-item-decrement"),
    path("quotation/", CartQuotationView.as_view(), name="cart-quotation"),
]
