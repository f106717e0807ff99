# public/views/order.py
"""
PUBLIC ORDER TRACKING

GET /api/public/orders/track/<number>/        order number or challan number
GET /api/public/orders/<number>/document/?phone=...
    challan (paid) or quotation (unpaid) PDF; phone must match the order

Tracking never returns the customer's email or address.
"""

from __future__ import annotations

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from orders.models import Order
from orders.services.challan_pdf import render_order_pdf
from orders.services.order_service import normalize_phone
from orders.views.order import pdf_response
from public.serializers import OrderDocumentRequestSerializer, TrackedOrderSerializer
from public.views.throttles import PublicPollThrottle

PHONE_MATCH_DIGITS = 10


def find_order(number: str):
    number = (number or "").strip()
    if not number:
        return None
    return (
        Order.objects.prefetch_related("items")
        .filter(Q(order_number__iexact=number) | Q(challan_number__iexact=number))
        .first()
    )


def phones_match(a: str, b: str) -> bool:
    da = normalize_phone(a).lstrip("+")[-PHONE_MATCH_DIGITS:]
    db = normalize_phone(b).lstrip("+")[-PHONE_MATCH_DIGITS:]
    return bool(da) and da == db


def find_order_for_phone(number: str, phone: str):
    order = find_order(number)
    if order is None or not phones_match(order.customer_phone, phone):
        return None
    return order


def _not_found():
    return error_response(
        code="ORDER_NOT_FOUND",
        message="Order not found",
        http_status=status.HTTP_404_NOT_FOUND,
    )


class OrderTrackView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(tags=["Public"], responses={200: TrackedOrderSerializer, 404: OpenApiResponse(description="Not found")})
    def get(self, request, number, *args, **kwargs):
        order = find_order(number)
        if order is None:
            return _not_found()
        return Response(TrackedOrderSerializer(order).data)


class OrderDocumentView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        tags=["Public"],
        parameters=[OpenApiParameter("phone", str, OpenApiParameter.QUERY, required=True)],
        responses={
            (200, "application/pdf"): OpenApiResponse(description="Challan or quotation PDF"),
            404: OpenApiResponse(description="Not found or phone mismatch"),
        },
    )
    def get(self, request, number, *args, **kwargs):
        s = OrderDocumentRequestSerializer(data=request.query_params)
        s.is_valid(raise_exception=True)

        # same answer for unknown number and wrong phone
        order = find_order_for_phone(number, s.validated_data["phone"])
        if order is None:
            return _not_found()

        filename, content = render_order_pdf(order)
        return pdf_response(filename, content)
