# public/apps.py

"""
PUBLIC APP CONFIG

Storefront API (AllowAny):
- Catalog, site content, notifications, feedback
- Checkout with Razorpay or manual payment
- Order tracking and challan download
"""

from django.apps import AppConfig


class PublicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "public"
    verbose_name = "Storefront API"
