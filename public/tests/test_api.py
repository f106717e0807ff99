# public/tests/test_api.py

"""
STOREFRONT API TESTS

Razorpay is never called; create_order is patched where checkout needs it.
"""

import hashlib
import hmac
import json
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from content.models import Feedback, PaymentSetting, SiteSetting
from orders.models import Order, PaymentAttempt
from orders.services import order_service
from products.models import Category, GiftBox, Product
from public.services.razorpay import RazorpayError

CHECKOUT_URL = "/api/public/checkout/"
CATALOG_URL = "/api/public/catalog/"
WEBHOOK_URL = "/api/public/payments/webhook/"
VERIFY_URL = "/api/public/payments/verify/"

KEY_SECRET = "api_key_secret"
WEBHOOK_SECRET = "api_webhook_secret"

CUSTOMER = {
    "name": "Karthik Subramanian",
    "email": "karthik@example.com",
    "phone": "98400 12345",
    "address": "7 Lake View Road, Chennai",
}

GATEWAY_ORDER = {"id": "order_API1", "amount": 300000, "currency": "INR"}


def enable_razorpay():
    for key, value in (
        (PaymentSetting.KEY_RAZORPAY_ENABLED, "true"),
        (PaymentSetting.KEY_RAZORPAY_KEY_ID, "rzp_test_api"),
        (PaymentSetting.KEY_RAZORPAY_KEY_SECRET, KEY_SECRET),
        (PaymentSetting.KEY_RAZORPAY_WEBHOOK_SECRET, WEBHOOK_SECRET),
    ):
        PaymentSetting.objects.update_or_create(key=key, defaults={"value": value})


class StorefrontTestBase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.sparklers = Category.objects.create(name="Sparklers", display_order=1)
        self.rockets = Category.objects.create(name="Rockets", display_order=2)
        self.hidden = Category.objects.create(name="Old Stock", status=Category.STATUS_INACTIVE)

        self.rocket = Product.objects.create(
            product_code="H100",
            product_name="Whistling Rocket",
            category=self.rockets,
            mrp=Decimal("2000.00"),
            final_rate=Decimal("1000.00"),
            stock=40,
            featured=True,
            user_for=Product.USER_FOR_ADULT,
        )
        self.sparkler = Product.objects.create(
            product_code="H101",
            product_name="Electric Sparkler",
            category=self.sparklers,
            mrp=Decimal("200.00"),
            final_rate=Decimal("100.00"),
            stock=100,
            user_for=Product.USER_FOR_KIDS,
        )
        Product.objects.create(
            product_code="H102",
            product_name="Retired Bomb",
            mrp=Decimal("100.00"),
            stock=5,
            status=Product.STATUS_INACTIVE,
        )


# =====================================================
# CATALOG + SITE
# =====================================================

class CatalogApiTests(StorefrontTestBase):
    """
    GUARANTEES:
    - only active categories/products are listed
    - category / user_for / featured / q filters narrow products
    """

    def test_catalog_lists_active_only(self):
        resp = self.client.get(CATALOG_URL)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        codes = {p["product_code"] for p in resp.data["products"]}
        self.assertEqual(codes, {"H100", "H101"})
        names = [c["name"] for c in resp.data["categories"]]
        self.assertEqual(names, ["Sparklers", "Rockets"])
        self.assertEqual(resp.data["categories"][0]["product_count"], 1)

    def test_filters(self):
        def codes(**params):
            return {p["product_code"] for p in self.client.get(CATALOG_URL, params).data["products"]}

        self.assertEqual(codes(category=str(self.rockets.id)), {"H100"})
        self.assertEqual(codes(category="sparklers"), {"H101"})
        self.assertEqual(codes(user_for="kids"), {"H101"})
        self.assertEqual(codes(featured="true"), {"H100"})
        self.assertEqual(codes(q="whistl"), {"H100"})

    def test_product_detail(self):
        resp = self.client.get("/api/public/products/h101/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["final_rate"], "100.00")
        self.assertTrue(resp.data["in_stock"])

        resp = self.client.get("/api/public/products/H102/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "PRODUCT_NOT_FOUND")

    def test_gift_boxes_active_only(self):
        GiftBox.objects.create(title="Family Pack", price=Decimal("1500"), original_price=Decimal("3000"))
        GiftBox.objects.create(
            title="Old Pack", price=Decimal("100"), original_price=Decimal("200"), status=GiftBox.STATUS_INACTIVE
        )
        resp = self.client.get("/api/public/gift-boxes/")
        self.assertEqual([b["title"] for b in resp.data], ["Family Pack"])
        self.assertEqual(resp.data[0]["discount"], 50)


class SiteApiTests(StorefrontTestBase):
    def test_site_payload(self):
        SiteSetting.objects.create(key=SiteSetting.KEY_COUNTDOWN_TARGET_DATE, value="2026-11-08T00:00:00")
        resp = self.client.get("/api/public/site/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("settings", resp.data)
        self.assertEqual(resp.data["countdown"]["target_date"], "2026-11-08T00:00:00")

    def test_payment_info_never_leaks_secrets(self):
        enable_razorpay()
        resp = self.client.get("/api/public/payment-info/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data["razorpay_enabled"])
        self.assertEqual(resp.data["razorpay_key_id"], "rzp_test_api")
        self.assertNotIn(KEY_SECRET, resp.content.decode())
        self.assertNotIn(WEBHOOK_SECRET, resp.content.decode())


# =====================================================
# NOTIFICATIONS + FEEDBACK
# =====================================================

class NotificationApiTests(StorefrontTestBase):
    def test_dismiss_persists_for_client(self):
        resp = self.client.get("/api/public/notifications/", HTTP_X_CLIENT_ID="browser-1")
        self.assertTrue(resp.data["show"])

        resp = self.client.post("/api/public/notifications/dismiss/", {}, format="json", HTTP_X_CLIENT_ID="browser-1")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        resp = self.client.get("/api/public/notifications/", HTTP_X_CLIENT_ID="browser-1")
        self.assertFalse(resp.data["show"])

        # other browsers still see it
        resp = self.client.get("/api/public/notifications/", HTTP_X_CLIENT_ID="browser-2")
        self.assertTrue(resp.data["show"])

    def test_dismiss_needs_owner(self):
        resp = self.client.post("/api/public/notifications/dismiss/", {}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "CLIENT_ID_REQUIRED")


class FeedbackApiTests(StorefrontTestBase):
    def test_submit_is_unverified_and_hidden(self):
        resp = self.client.post(
            "/api/public/feedback/",
            {"name": "Priya", "rating": 5, "comment": "Great crackers"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertFalse(Feedback.objects.get().verified)

        self.assertEqual(self.client.get("/api/public/feedback/").data, [])

        Feedback.objects.update(verified=True)
        self.assertEqual(len(self.client.get("/api/public/feedback/").data), 1)

    def test_rating_bounds(self):
        resp = self.client.post("/api/public/feedback/", {"name": "A", "rating": 6, "comment": "x"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


# =====================================================
# CHECKOUT
# =====================================================

class CheckoutApiTests(StorefrontTestBase):
    """
    GUARANTEES:
    - online checkout returns the Razorpay payload and clears the cart
    - manual checkout returns bank details
    - minimum order, empty cart and stock are enforced before anything is written
    - a gateway failure answers 502 and keeps the order
    """

    def _body(self, **extra):
        return {**CUSTOMER, **extra}

    @mock.patch("public.services.razorpay.create_order", return_value=GATEWAY_ORDER)
    def test_online_checkout_from_cart(self, create_order):
        enable_razorpay()
        self.client.credentials(HTTP_X_CLIENT_ID="tab-9")
        self.client.post("/api/cart/items/", {"product_code": "H100", "quantity": 3}, format="json")

        resp = self.client.post(CHECKOUT_URL, self._body(payment_method="online"), format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        payment = resp.data["payment"]
        self.assertEqual(payment["order_id"], "order_API1")
        self.assertEqual(payment["amount"], 300000)
        self.assertEqual(payment["key"], "rzp_test_api")
        self.assertEqual(payment["prefill"]["contact"], "9840012345")
        self.assertEqual(resp.data["order"]["total_amount"], "3000.00")

        self.assertEqual(self.client.get("/api/cart/").data["items"], [])
        self.rocket.refresh_from_db()
        self.assertEqual(self.rocket.stock, 37)

    def test_manual_checkout_with_items(self):
        PaymentSetting.objects.create(key=PaymentSetting.KEY_BANK_NAME, value="Indian Bank")
        resp = self.client.post(
            CHECKOUT_URL,
            self._body(payment_method="manual", items=[{"product_code": "H100", "quantity": 4}]),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["payment"]["method"], "manual")
        self.assertEqual(resp.data["payment"]["bank_details"]["bank_name"], "Indian Bank")
        self.assertEqual(Order.objects.get().payment_method, Order.PAYMENT_METHOD_MANUAL)

    def test_minimum_order(self):
        resp = self.client.post(
            CHECKOUT_URL,
            self._body(payment_method="manual", items=[{"product_code": "H101", "quantity": 2}]),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "MINIMUM_ORDER")
        self.assertEqual(Order.objects.count(), 0)

    def test_empty_cart(self):
        resp = self.client.post(CHECKOUT_URL, self._body(payment_method="manual"), format="json", HTTP_X_CLIENT_ID="t")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "EMPTY_CART")

    def test_insufficient_stock(self):
        resp = self.client.post(
            CHECKOUT_URL,
            self._body(payment_method="manual", items=[{"product_code": "H100", "quantity": 41}]),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.rocket.refresh_from_db()
        self.assertEqual(self.rocket.stock, 40)

    def test_online_disabled(self):
        resp = self.client.post(
            CHECKOUT_URL,
            self._body(payment_method="online", items=[{"product_code": "H100", "quantity": 3}]),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(resp.data["error"]["code"], "PAYMENTS_UNAVAILABLE")
        self.assertEqual(Order.objects.count(), 0)

    @mock.patch("public.services.razorpay.create_order", side_effect=RazorpayError("timeout"))
    def test_gateway_failure_keeps_order(self, _create):
        enable_razorpay()
        resp = self.client.post(
            CHECKOUT_URL,
            self._body(payment_method="online", items=[{"product_code": "H100", "quantity": 3}]),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(resp.data["error"]["code"], "GATEWAY_ERROR")

        order = Order.objects.get()
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(order.payment_attempts.get().status, PaymentAttempt.STATUS_FAILED)

    def test_invalid_phone(self):
        resp = self.client.post(CHECKOUT_URL, self._body(phone="123", items=[]), format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", resp.data)


# =====================================================
# PAYMENT CALLBACKS
# =====================================================

class PaymentCallbackApiTests(StorefrontTestBase):
    def setUp(self):
        super().setUp()
        enable_razorpay()
        with mock.patch("public.services.razorpay.create_order", return_value=GATEWAY_ORDER):
            resp = self.client.post(
                CHECKOUT_URL,
                {**CUSTOMER, "payment_method": "online", "items": [{"product_code": "H100", "quantity": 3}]},
                format="json",
            )
        self.order_number = resp.data["order"]["order_number"]

    def _order(self):
        return Order.objects.get(order_number=self.order_number)

    def test_verify_success(self):
        sig = hmac.new(KEY_SECRET.encode(), b"order_API1|pay_API1", hashlib.sha256).hexdigest()
        resp = self.client.post(
            VERIFY_URL,
            {"razorpay_order_id": "order_API1", "razorpay_payment_id": "pay_API1", "razorpay_signature": sig},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["order"]["payment_status"], Order.PAYMENT_PAID)

    def test_verify_bad_signature_records_failure(self):
        resp = self.client.post(
            VERIFY_URL,
            {"razorpay_order_id": "order_API1", "razorpay_payment_id": "pay_API1", "razorpay_signature": "bad"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "SIGNATURE_MISMATCH")
        self.assertEqual(self._order().payment_status, Order.PAYMENT_FAILED)

    def test_failure_callback(self):
        resp = self.client.post(
            "/api/public/payments/failure/",
            {"razorpay_order_id": "order_API1", "reason": "Payment cancelled"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(self._order().payment_status, Order.PAYMENT_FAILED)

    def test_unknown_gateway_order(self):
        resp = self.client.post(
            "/api/public/payments/failure/", {"razorpay_order_id": "order_NOPE"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def _webhook(self, payload, secret=WEBHOOK_SECRET):
        raw = json.dumps(payload)
        sig = hmac.new(secret.encode(), raw.encode(), hashlib.sha256).hexdigest()
        return self.client.post(WEBHOOK_URL, raw, content_type="application/json", HTTP_X_RAZORPAY_SIGNATURE=sig)

    def test_webhook_captured(self):
        payload = {
            "event": "payment.captured",
            "payload": {"payment": {"entity": {"id": "pay_WH", "order_id": "order_API1", "amount": 300000}}},
        }
        resp = self._webhook(payload)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(self._order().payment_status, Order.PAYMENT_PAID)

        # replay
        resp = self._webhook(payload)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["detail"], "Already processed")

    def test_webhook_bad_signature(self):
        payload = {
            "event": "payment.captured",
            "payload": {"payment": {"entity": {"id": "pay_WH", "order_id": "order_API1", "amount": 300000}}},
        }
        resp = self._webhook(payload, secret="wrong")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self._order().payment_status, Order.PAYMENT_PENDING)

    def test_retry_payment(self):
        self.client.post("/api/public/payments/failure/", {"razorpay_order_id": "order_API1"}, format="json")

        with mock.patch("public.services.razorpay.create_order", return_value={"id": "order_API2"}):
            resp = self.client.post(
                "/api/public/checkout/retry/",
                {"order_number": self.order_number, "phone": "+91 98400 12345"},
                format="json",
            )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["payment"]["order_id"], "order_API2")
        self.assertEqual(resp.data["order"]["payment_status"], Order.PAYMENT_PENDING)

    def test_retry_wrong_phone(self):
        resp = self.client.post(
            "/api/public/checkout/retry/",
            {"order_number": self.order_number, "phone": "9000000000"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)


# =====================================================
# TRACKING + DOCUMENTS
# =====================================================

class TrackingApiTests(StorefrontTestBase):
    """
    GUARANTEES:
    - tracking works by order number or challan number
    - email and address never appear in tracking responses
    - PDFs need the phone on the order
    """

    def setUp(self):
        super().setUp()
        self.order = order_service.place_order(
            customer=CUSTOMER,
            items=[{"product_code": "H100", "quantity": 3}],
            payment_method=Order.PAYMENT_METHOD_MANUAL,
        )

    def test_track_by_order_number(self):
        resp = self.client.get(f"/api/public/orders/track/{self.order.order_number}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["order_status"], Order.STATUS_CONFIRMED)
        self.assertEqual(len(resp.data["items"]), 1)
        self.assertTrue(resp.data["timeline"][0]["completed"])
        self.assertFalse(resp.data["timeline"][-1]["completed"])

        body = resp.content.decode()
        self.assertNotIn("karthik@example.com", body)
        self.assertNotIn("Lake View", body)

    def test_track_by_challan_number(self):
        resp = self.client.get(f"/api/public/orders/track/{self.order.challan_number}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["order_number"], self.order.order_number)

    def test_track_unknown(self):
        resp = self.client.get("/api/public/orders/track/NOPE/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "ORDER_NOT_FOUND")

    def test_document_needs_matching_phone(self):
        url = f"/api/public/orders/{self.order.order_number}/document/"

        resp = self.client.get(url, {"phone": "9000000000"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

        resp = self.client.get(url, {"phone": "+91 98400 12345"})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp["Content-Type"], "application/pdf")
        self.assertIn("Quotation_", resp["Content-Disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_document_for_paid_order_is_challan(self):
        order_service.mark_order_paid(self.order, payment_id="manual")
        resp = self.client.get(f"/api/public/orders/{self.order.order_number}/document/", {"phone": "9840012345"})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("Remittance_", resp["Content-Disposition"])
