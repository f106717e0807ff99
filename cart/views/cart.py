# cart/views/cart.py

"""
======================================================
PATH: cart/views/cart.py
======================================================
STOREFRONT CART API

Owner:
- signed-in user (JWT), else the anonymous X-Client-Id header
  (or client_id query/body param)

Every mutating endpoint returns the full cart (lines + summary) so the
storefront never computes totals itself.

Error shape:
    {"error": {"code", "message"}}
======================================================
"""

from __future__ import annotations

import logging

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.api_errors import error_response
from cart.serializers import (
    CartAddItemSerializer,
    CartQuantitySerializer,
    CartSerializer,
    QuotationRequestSerializer,
)
from cart.services import cart as cart_service
from cart.services.exceptions import CartOwnerRequiredError
from orders.services.challan_pdf import render_cart_quotation
from products.services.exceptions import ProductUnavailableError

logger = logging.getLogger(__name__)


class CartThrottle(AnonRateThrottle):
    scope = "public_catalog"


class CartBaseView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [CartThrottle]

    def handle_exception(self, exc):
        if isinstance(exc, CartOwnerRequiredError):
            return error_response(
                code="CLIENT_ID_REQUIRED",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        if isinstance(exc, ProductUnavailableError):
            return error_response(
                code="PRODUCT_UNAVAILABLE",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        return super().handle_exception(exc)

    def cart(self):
        return cart_service.get_cart_for_request(self.request)

    def cart_response(self, cart, http_status=status.HTTP_200_OK):
        cart.refresh_from_db()
        return Response(CartSerializer(cart).data, status=http_status)


# ======================================================
# GET /api/cart/
# ======================================================

class CartView(CartBaseView):
    @extend_schema(responses={200: CartSerializer})
    def get(self, request):
        return self.cart_response(self.cart())


class CartClearView(CartBaseView):
    @extend_schema(request=None, responses={200: CartSerializer})
    def post(self, request):
        cart = self.cart()
        cart_service.clear_cart(cart)
        return self.cart_response(cart)


# ======================================================
# LINES
# ======================================================

class CartItemsView(CartBaseView):
    """
    POST /api/cart/items/  {product_code, quantity}
    Adding a product already in the cart increments its line.
    """

    @extend_schema(request=CartAddItemSerializer, responses={200: CartSerializer})
    def post(self, request):
        s = CartAddItemSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = self.cart()
        cart_service.add_item(
            cart,
            product_code=s.validated_data["product_code"],
            quantity=s.validated_data["quantity"],
        )
        return self.cart_response(cart)


class CartItemDetailView(CartBaseView):
    """
    PATCH  /api/cart/items/<code>/  {quantity}   (<= 0 removes)
    DELETE /api/cart/items/<code>/
    """

    @extend_schema(request=CartQuantitySerializer, responses={200: CartSerializer})
    def patch(self, request, product_code):
        s = CartQuantitySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = self.cart()
        cart_service.set_quantity(cart, product_code=product_code, quantity=s.validated_data["quantity"])
        return self.cart_response(cart)

    @extend_schema(responses={200: CartSerializer, 404: OpenApiResponse(description="Not in cart")})
    def delete(self, request, product_code):
        cart = self.cart()
        if not cart_service.remove_item(cart, product_code=product_code):
            return error_response(
                code="NOT_IN_CART",
                message=f"{product_code.upper()} is not in the cart",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return self.cart_response(cart)


class CartItemDecrementView(CartBaseView):
    """
    POST /api/cart/items/<code>/decrement/
    Removing the last unit removes the line.
    """

    @extend_schema(request=None, responses={200: CartSerializer})
    def post(self, request, product_code):
        cart = self.cart()
        cart_service.decrement_item(cart, product_code=product_code)
        return self.cart_response(cart)


# ======================================================
# QUOTATION PDF
# POST /api/cart/quotation/  {name?, email?, phone?, address?}
# ======================================================

class CartQuotationView(CartBaseView):
    @extend_schema(
        request=QuotationRequestSerializer,
        responses={
            (200, "application/pdf"): OpenApiResponse(description="Quotation PDF"),
            400: OpenApiResponse(description="Empty cart"),
        },
    )
    def post(self, request):
        s = QuotationRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = cart_service.get_cart_for_request(request, create=False)
        if cart is None or cart.is_empty:
            return error_response(
                code="EMPTY_CART",
                message="Add products to the cart before requesting a quotation.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        filename, content = render_cart_quotation(cart, customer=dict(s.validated_data))
        logger.info("Cart quotation generated", extra={"cart_id": str(cart.id)})

        resp = HttpResponse(content, content_type="application/pdf")
        resp["Content-Disposition"] = f'attachment; filename="{filename}"'
        return resp
