# public/views/checkout.py
"""
======================================================
PATH: public/views/checkout.py
======================================================
STOREFRONT CHECKOUT

POST /api/public/checkout/
    {name, email?, phone, address?, payment_method, items?: [{product_code, quantity}]}
    -> 201 {"order": {...}, "payment": {...}}

POST /api/public/checkout/retry/
    {order_number, phone} -> 200 {"order": {...}, "payment": {...}}

Error codes:
    EMPTY_CART, MINIMUM_ORDER, ORDER_INVALID, PRODUCT_UNAVAILABLE (400)
    ORDER_NOT_FOUND (404)
    INSUFFICIENT_STOCK, PAYMENT_NOT_ALLOWED (409)
    PAYMENTS_UNAVAILABLE (503)
    GATEWAY_ERROR (502, order already placed)
======================================================
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from cart.services.exceptions import EmptyCartError, MinimumOrderError
from orders.services.exceptions import InsufficientStockError, OrderError, PaymentError, ProductUnavailableError
from public.serializers import CheckoutSerializer, PaymentRetrySerializer
from public.services.checkout import (
    GatewayError,
    PaymentsUnavailableError,
    checkout,
    order_summary,
    retry_online_payment,
)
from public.views.order import find_order_for_phone
from public.views.throttles import PublicWriteThrottle

logger = logging.getLogger(__name__)


def checkout_error_response(exc):
    """
    Map checkout/payment exceptions to the API error shape.
    Returns None for anything it does not recognise.
    """
    if isinstance(exc, GatewayError):
        return Response(
            {
                "error": {
                    "code": "GATEWAY_ERROR",
                    "message": "Payment gateway is unavailable. Your order is saved; retry payment or pay manually.",
                },
                "order": order_summary(exc.order),
            },
            status=status.HTTP_502_BAD_GATEWAY,
        )
    if isinstance(exc, PaymentsUnavailableError):
        return error_response(code="PAYMENTS_UNAVAILABLE", message=str(exc), http_status=status.HTTP_503_SERVICE_UNAVAILABLE)
    if isinstance(exc, EmptyCartError):
        return error_response(code="EMPTY_CART", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, MinimumOrderError):
        return Response(
            {
                "error": {"code": "MINIMUM_ORDER", "message": str(exc)},
                "minimum": str(exc.minimum),
                "total": str(exc.total),
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, InsufficientStockError):
        return error_response(code="INSUFFICIENT_STOCK", message=str(exc), http_status=status.HTTP_409_CONFLICT)
    if isinstance(exc, ProductUnavailableError):
        return error_response(code="PRODUCT_UNAVAILABLE", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PaymentError):
        return error_response(code="PAYMENT_NOT_ALLOWED", message=str(exc), http_status=status.HTTP_409_CONFLICT)
    if isinstance(exc, OrderError):
        return error_response(code="ORDER_INVALID", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)
    return None


class PublicCheckoutView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    def handle_exception(self, exc):
        return checkout_error_response(exc) or super().handle_exception(exc)

    @extend_schema(
        tags=["Public"],
        request=CheckoutSerializer,
        responses={
            201: OpenApiResponse(description="Order placed; payment payload included"),
            400: OpenApiResponse(description="Validation / empty cart / minimum order"),
            409: OpenApiResponse(description="Insufficient stock"),
            502: OpenApiResponse(description="Gateway failure (order kept)"),
            503: OpenApiResponse(description="Online payments disabled"),
        },
    )
    def post(self, request, *args, **kwargs):
        s = CheckoutSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = checkout(
            request=request,
            customer=s.customer(),
            payment_method=s.validated_data["payment_method"],
            items=s.validated_data.get("items"),
        )
        return Response(result, status=status.HTTP_201_CREATED)


class PublicPaymentRetryView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    def handle_exception(self, exc):
        return checkout_error_response(exc) or super().handle_exception(exc)

    @extend_schema(
        tags=["Public"],
        request=PaymentRetrySerializer,
        responses={
            200: OpenApiResponse(description="New payment payload"),
            404: OpenApiResponse(description="Order not found"),
            409: OpenApiResponse(description="Already paid / not an online order"),
        },
    )
    def post(self, request, *args, **kwargs):
        s = PaymentRetrySerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = find_order_for_phone(s.validated_data["order_number"], s.validated_data["phone"])
        if order is None:
            return error_response(
                code="ORDER_NOT_FOUND",
                message="No order matches that number and phone",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        payment = retry_online_payment(order)
        order.refresh_from_db()
        return Response({"order": order_summary(order), "payment": payment}, status=status.HTTP_200_OK)
