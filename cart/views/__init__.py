from .cart import CartClearView, CartItemDecrementView, CartItemDetailView, CartItemsView, CartQuotationView, CartView

__all__ = [
    "CartClearView",
    "CartItemDecrementView",
    "CartItemDetailView",
    "CartItemsView",
    "CartQuotationView",
    "CartView",
]
