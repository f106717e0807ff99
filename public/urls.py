"""
PUBLIC API URLS (STOREFRONT)

Base path (mounted in backend/urls.py):
    /api/public/

Catalog:
- GET  catalog/
- GET  products/<product_code>/
- GET  gift-boxes/

Site:
- GET  site/
- GET  payment-info/
- GET  notifications/
- POST notifications/dismiss/
- GET|POST feedback/

Orders:
- POST checkout/
- POST checkout/retry/
- GET  orders/track/<number>/
- GET  orders/<number>/document/?phone=

Razorpay:
- POST payments/verify/
- POST payments/failure/
- POST payments/webhook/
"""

from __future__ import annotations

from django.urls import path

from public.views.catalog import PublicCatalogView, PublicGiftBoxListView, PublicProductDetailView
from public.views.checkout import PublicCheckoutView, PublicPaymentRetryView
from public.views.order import OrderDocumentView, OrderTrackView
from public.views.payments import PaymentFailureView, PaymentVerifyView, RazorpayWebhookView
from public.views.site import (
    NotificationDismissView,
    NotificationView,
    PublicFeedbackView,
    PublicPaymentInfoView,
    PublicSiteView,
)

app_name = "public"

urlpatterns = [
    # Catalog
    path("catalog/", PublicCatalogView.as_view(), name="public-catalog"),
    path("products/<str:product_code>/", PublicProductDetailView.as_view(), name="public-product"),
    path("gift-boxes/", PublicGiftBoxListView.as_view(), name="public-gift-boxes"),

    # Site content
    path("site/", PublicSiteView.as_view(), name="public-site"),
    path("payment-info/", PublicPaymentInfoView.as_view(), name="public-payment-info"),
    path("notifications/", NotificationView.as_view(), name="public-notifications"),
    path("notifications/dismiss/", NotificationDismissView.as_view(), name="public-notifications-dismiss"),
    path("feedback/", PublicFeedbackView.as_view(), name="public-feedback"),

    # Checkout + tracking
    path("checkout/", PublicCheckoutView.as_view(), name="public-checkout"),
    path("checkout/retry/", PublicPaymentRetryView.as_view(), name="public-checkout-retry"),
    path("orders/track/<str:number>/", OrderTrackView.as_view(), name="public-order-track"),
    path("orders/<str:number>/document/", OrderDocumentView.as_view(), name="public-order-document"),

    # Razorpay
    path("payments/verify/", PaymentVerifyView.as_view(), name="razorpay-verify"),
    path("payments/failure/", PaymentFailureView.as_view(), name="razorpay-failure"),
    path("payments/webhook/", RazorpayWebhookView.as_view(), name="razorpay-webhook"),
]
