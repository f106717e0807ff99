# orders/apps.py

"""
ORDERS APP CONFIG

Storefront orders, their customers and gateway payment attempts.
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
