# public/views/site.py
"""
PUBLIC SITE CONTENT

GET  /api/public/site/                     settings + countdown + homepage
GET  /api/public/payment-info/             razorpay on/off + key id, bank, QR
GET  /api/public/notifications/            category updates (per owner)
POST /api/public/notifications/dismiss/    {key?, client_id?}
GET  /api/public/feedback/                 verified only
POST /api/public/feedback/                 {name, rating, comment}

Notification owner:
- signed-in user (JWT), else X-Client-Id header / client_id param
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from cart.services.cart import client_id_from_request
from content.models import Feedback
from content.serializers import FeedbackSerializer, FeedbackSubmitSerializer, NotificationDismissSerializer
from content.services import notifications
from content.services.payment_settings import public_payment_info
from content.services.site_settings import public_site_payload
from public.views.throttles import PublicCatalogThrottle, PublicWriteThrottle

logger = logging.getLogger(__name__)

FEEDBACK_LIMIT = 50


def _owner(request, client_id: str = "") -> dict:
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return {"user": user}
    return {"client_id": (client_id or client_id_from_request(request)).strip()}


class PublicSiteView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: OpenApiResponse(description="{settings, countdown, homepage}")})
    def get(self, request, *args, **kwargs):
        return Response(public_site_payload())


class PublicPaymentInfoView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: OpenApiResponse(description="Public payment info (no secrets)")})
    def get(self, request, *args, **kwargs):
        return Response(public_payment_info())


# =====================================================
# NOTIFICATIONS
# =====================================================

class NotificationView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: OpenApiResponse(description="Category updates notification")})
    def get(self, request, *args, **kwargs):
        return Response(notifications.category_updates(**_owner(request)))


class NotificationDismissView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=NotificationDismissSerializer,
        responses={200: OpenApiResponse(description="Dismissed"), 400: OpenApiResponse(description="No owner")},
    )
    def post(self, request, *args, **kwargs):
        s = NotificationDismissSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        owner = _owner(request, s.validated_data.get("client_id", ""))
        if "user" not in owner and not owner["client_id"]:
            return error_response(
                code="CLIENT_ID_REQUIRED",
                message="Send X-Client-Id to dismiss notifications anonymously.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        row = notifications.dismiss(s.validated_data["key"], **owner)
        return Response({"key": row.notification_key, "dismissed": True, "dismissed_at": row.dismissed_at})


# =====================================================
# FEEDBACK
# =====================================================

class PublicFeedbackView(APIView):
    permission_classes = [AllowAny]

    def get_throttles(self):
        if self.request.method == "POST":
            return [PublicWriteThrottle()]
        return [PublicCatalogThrottle()]

    @extend_schema(tags=["Public"], responses={200: FeedbackSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        rows = Feedback.objects.filter(verified=True).order_by("-created_at")[:FEEDBACK_LIMIT]
        return Response(FeedbackSerializer(rows, many=True).data)

    @extend_schema(tags=["Public"], request=FeedbackSubmitSerializer, responses={201: FeedbackSubmitSerializer})
    def post(self, request, *args, **kwargs):
        s = FeedbackSubmitSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        row = s.save(verified=False)

        logger.info("Feedback submitted", extra={"feedback_id": str(row.id), "rating": row.rating})
        return Response(FeedbackSubmitSerializer(row).data, status=status.HTTP_201_CREATED)
