# cart/admin.py

from django.contrib import admin

from cart.models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ("product", "quantity", "unit_price", "created_at", "updated_at")


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "client_id", "item_count", "total_amount", "updated_at")
    search_fields = ("client_id", "user__email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [CartItemInline]
