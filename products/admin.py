# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Django admin for the catalog.

- final_rate is shown but derived on save when left blank
- gift box discount/final_rate are always derived (read-only here)
"""

from django.contrib import admin

from products.models import Category, GiftBox, Product


# =====================================================
# CATEGORY
# =====================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "display_order", "status")
    list_filter = ("status",)
    search_fields = ("name",)
    ordering = ("display_order", "name")


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "product_code",
        "product_name",
        "category",
        "user_for",
        "mrp",
        "discount",
        "final_rate",
        "stock",
        "status",
        "featured",
    )
    list_filter = ("status", "featured", "user_for", "category")
    search_fields = ("product_code", "product_name")
    list_editable = ("status", "featured")
    ordering = ("product_code",)
    readonly_fields = ("created_at", "updated_at")


# =====================================================
# GIFT BOX
# =====================================================

@admin.register(GiftBox)
class GiftBoxAdmin(admin.ModelAdmin):
    list_display = ("title", "price", "original_price", "discount", "badge", "status")
    list_filter = ("status",)
    search_fields = ("title",)
    readonly_fields = ("discount", "final_rate", "created_at", "updated_at")
