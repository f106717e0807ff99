# public/views/payments.py
"""
RAZORPAY CALLBACKS

POST /api/public/payments/verify/
    {razorpay_order_id, razorpay_payment_id, razorpay_signature}
POST /api/public/payments/failure/
    {razorpay_order_id, reason?, error?}
POST /api/public/payments/webhook/
    raw JSON body, X-Razorpay-Signature header

Rules:
- All three are idempotent (keyed on the Razorpay order id)
- A paid order is never downgraded by a late failure
- The webhook answers 200 for events it ignores so Razorpay stops retrying
"""

from __future__ import annotations

import json
import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from content.services.payment_settings import razorpay_credentials
from public.serializers import PaymentFailureSerializer, PaymentVerifySerializer
from public.services.checkout import order_summary
from public.services.payments import (
    SignatureMismatchError,
    UnknownPaymentError,
    process_webhook_event,
    record_checkout_failure,
    verify_checkout_payment,
)
from public.services.razorpay import verify_webhook_signature
from public.views.throttles import PublicWriteThrottle, WebhookThrottle

logger = logging.getLogger(__name__)


def _unknown_payment(exc):
    return error_response(
        code="PAYMENT_NOT_FOUND",
        message=str(exc),
        http_status=status.HTTP_404_NOT_FOUND,
    )


class PaymentVerifyView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=PaymentVerifySerializer,
        responses={
            200: OpenApiResponse(description="Order paid"),
            400: OpenApiResponse(description="Signature mismatch"),
            404: OpenApiResponse(description="Unknown Razorpay order"),
        },
    )
    def post(self, request, *args, **kwargs):
        s = PaymentVerifySerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        try:
            order = verify_checkout_payment(
                gateway_order_id=d["razorpay_order_id"],
                payment_id=d["razorpay_payment_id"],
                signature=d["razorpay_signature"],
            )
        except UnknownPaymentError as exc:
            return _unknown_payment(exc)
        except SignatureMismatchError as exc:
            return error_response(
                code="SIGNATURE_MISMATCH",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response({"ok": True, "order": order_summary(order)}, status=status.HTTP_200_OK)


class PaymentFailureView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=PaymentFailureSerializer,
        responses={200: OpenApiResponse(description="Failure recorded"), 404: OpenApiResponse(description="Unknown")},
    )
    def post(self, request, *args, **kwargs):
        s = PaymentFailureSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        try:
            order = record_checkout_failure(
                gateway_order_id=d["razorpay_order_id"],
                reason=d["reason"],
                payload=d.get("error"),
            )
        except UnknownPaymentError as exc:
            return _unknown_payment(exc)

        return Response({"ok": True, "order": order_summary(order)}, status=status.HTTP_200_OK)


class RazorpayWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser]
    throttle_classes = [WebhookThrottle]

    @extend_schema(
        tags=["Public"],
        request=None,
        responses={200: OpenApiResponse(description="Processed"), 400: OpenApiResponse(description="Bad signature")},
    )
    def post(self, request, *args, **kwargs):
        raw_body = request.body or b""
        signature = request.headers.get("X-Razorpay-Signature", "")

        logger.info("Razorpay webhook received")

        creds = razorpay_credentials()
        if not verify_webhook_signature(
            raw_body=raw_body,
            signature=signature,
            webhook_secret=creds["webhook_secret"],
        ):
            logger.warning("Invalid Razorpay webhook signature")
            return Response({"ok": False, "detail": "Invalid signature"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return Response({"ok": False, "detail": "Invalid JSON"}, status=status.HTTP_200_OK)
        if not isinstance(payload, dict):
            return Response({"ok": False, "detail": "Invalid payload"}, status=status.HTTP_200_OK)

        result = process_webhook_event(payload)
        return Response(result, status=status.HTTP_200_OK)
