# orders/views/order.py

"""
======================================================
PATH: orders/views/order.py
======================================================
ORDER VIEWSET (ADMIN CONSOLE)

Purpose:
- Orders list with filters + search, retrieve, delete
- Status / tracking updates through the lifecycle rules
- Manual payment marks (paid / failed)
- Challan / quotation PDF download

Security:
- Reads need orders.view
- Everything else needs orders.manage

Filters (query params):
    order_status, payment_status, payment_method,
    date_from / date_to (YYYY-MM-DD, on created_at),
    search (order no, challan no, customer name/phone/email)
======================================================
"""

from __future__ import annotations

import logging
from datetime import datetime

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from backend.api_errors import error_response
from orders.models import Order
from orders.serializers import (
    OrderListSerializer,
    OrderMarkFailedSerializer,
    OrderMarkPaidSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from orders.services import order_service
from orders.services.challan_pdf import render_order_pdf
from orders.services.exceptions import InvalidOrderTransitionError
from permissions.roles import CAP_ORDERS_MANAGE, CAP_ORDERS_VIEW, CapabilityByActionMixin

logger = logging.getLogger(__name__)


def _parse_date(s: str):
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


def pdf_response(filename: str, content: bytes, *, inline: bool = False) -> HttpResponse:
    resp = HttpResponse(content, content_type="application/pdf")
    disposition = "inline" if inline else "attachment"
    resp["Content-Disposition"] = f'{disposition}; filename="{filename}"'
    return resp


class OrderViewSet(
    CapabilityByActionMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    read_actions = {"list", "retrieve", "challan"}
    read_capability = CAP_ORDERS_VIEW
    write_capability = CAP_ORDERS_MANAGE

    filterset_fields = ["order_status", "payment_status", "payment_method"]
    search_fields = [
        "order_number",
        "challan_number",
        "customer_name",
        "customer_phone",
        "customer_email",
    ]
    ordering_fields = ["created_at", "total_amount", "order_status", "payment_status"]
    ordering = ["-created_at"]

    def get_serializer_class(self):
        if self.action == "list":
            return OrderListSerializer
        return OrderSerializer

    def get_queryset(self):
        qs = Order.objects.all().prefetch_related("items")
        if self.action != "list":
            qs = qs.prefetch_related("payment_attempts")

        params = self.request.query_params

        date_from = _parse_date((params.get("date_from") or "").strip())
        if date_from:
            qs = qs.filter(created_at__date__gte=date_from)

        date_to = _parse_date((params.get("date_to") or "").strip())
        if date_to:
            qs = qs.filter(created_at__date__lte=date_to)

        customer_id = (params.get("customer") or "").strip()
        if customer_id:
            qs = qs.filter(customer_id=customer_id)

        return qs

    def perform_destroy(self, instance):
        order_service.delete_order(instance)

    # ======================================================
    # STATUS / TRACKING
    # PATCH /api/orders/orders/:id/status/
    # ======================================================

    @extend_schema(
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            409: OpenApiResponse(description="Transition not allowed"),
        },
    )
    @action(detail=True, methods=["patch", "post"], url_path="status")
    def update_status(self, request, pk=None):
        order = self.get_object()
        s = OrderStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = order_service.update_order_status(
                order,
                order_status=s.validated_data.get("order_status"),
                tracking_notes=s.validated_data.get("tracking_notes"),
            )
        except InvalidOrderTransitionError as exc:
            return error_response(
                code="INVALID_TRANSITION",
                message=str(exc),
                http_status=status.HTTP_409_CONFLICT,
            )

        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    # ======================================================
    # MANUAL PAYMENT MARKS
    # ======================================================

    @extend_schema(request=OrderMarkPaidSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="mark-paid")
    def mark_paid(self, request, pk=None):
        order = self.get_object()
        s = OrderMarkPaidSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            order = order_service.mark_order_paid(order, payment_id=s.validated_data["payment_id"])
        except InvalidOrderTransitionError as exc:
            return error_response(
                code="INVALID_TRANSITION",
                message=str(exc),
                http_status=status.HTTP_409_CONFLICT,
            )

        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    @extend_schema(request=OrderMarkFailedSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="mark-failed")
    def mark_failed(self, request, pk=None):
        order = self.get_object()
        s = OrderMarkFailedSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        if order.is_paid:
            return error_response(
                code="ALREADY_PAID",
                message=f"Order {order.order_number} is already paid",
                http_status=status.HTTP_409_CONFLICT,
            )

        order = order_service.mark_order_failed(order, reason=s.validated_data["reason"])
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    # ======================================================
    # CHALLAN PDF
    # GET /api/orders/orders/:id/challan/
    # ======================================================

    @extend_schema(responses={(200, "application/pdf"): OpenApiResponse(description="Challan or quotation PDF")})
    @action(detail=True, methods=["get"], url_path="challan")
    def challan(self, request, pk=None):
        order = self.get_object()
        filename, content = render_order_pdf(order)
        return pdf_response(filename, content)
