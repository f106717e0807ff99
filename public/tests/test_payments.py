# public/tests/test_payments.py

"""
PAYMENT OUTCOME TESTS

Run with:
    python manage.py test public -v 2
"""

import hashlib
import hmac
from decimal import Decimal
from unittest import mock

from django.test import TestCase

from content.models import PaymentSetting
from orders.models import Customer, Order, PaymentAttempt
from orders.services import order_service
from orders.services.exceptions import PaymentError
from products.models import Product
from public.services import checkout as checkout_service
from public.services import payments
from public.services.razorpay import RazorpayError

KEY_SECRET = "test_key_secret"

CUSTOMER = {
    "name": "Meena Raj",
    "email": "meena@example.com",
    "phone": "9876501234",
    "address": "4 Temple Street, Madurai",
}


def sign(order_id: str, payment_id: str) -> str:
    return hmac.new(KEY_SECRET.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


class PaymentFixtureMixin:
    def setUp(self):
        Product.objects.create(
            product_code="H010",
            product_name="Atom Bomb",
            mrp=Decimal("2000.00"),
            final_rate=Decimal("1000.00"),
            stock=50,
        )
        for key, value in (
            (PaymentSetting.KEY_RAZORPAY_ENABLED, "true"),
            (PaymentSetting.KEY_RAZORPAY_KEY_ID, "rzp_test_key"),
            (PaymentSetting.KEY_RAZORPAY_KEY_SECRET, KEY_SECRET),
            (PaymentSetting.KEY_RAZORPAY_WEBHOOK_SECRET, "whsec"),
        ):
            PaymentSetting.objects.create(key=key, value=value)

        self.order = order_service.place_order(
            customer=CUSTOMER,
            items=[{"product_code": "H010", "quantity": 3}],
        )

    def _start(self, gateway_id="order_TEST1"):
        with mock.patch(
            "public.services.razorpay.create_order",
            return_value={"id": gateway_id, "amount": 300000, "currency": "INR"},
        ):
            return checkout_service.start_online_payment(self.order)


class StartPaymentTests(PaymentFixtureMixin, TestCase):
    """
    GUARANTEES:
    - payload carries key, paise amount, gateway order id and prefill
    - a gateway failure leaves the order placed and records a failed attempt
    """

    def test_checkout_payload(self):
        payload = self._start()

        self.assertEqual(payload["key"], "rzp_test_key")
        self.assertEqual(payload["amount"], 300000)
        self.assertEqual(payload["currency"], "INR")
        self.assertEqual(payload["order_id"], "order_TEST1")
        self.assertEqual(payload["prefill"], {"name": "Meena Raj", "email": "meena@example.com", "contact": "9876501234"})

        attempt = PaymentAttempt.objects.get(gateway_order_id="order_TEST1")
        self.assertEqual(attempt.status, PaymentAttempt.STATUS_INITIATED)
        self.assertEqual(attempt.amount, Decimal("3000.00"))

    def test_receipt_is_order_number(self):
        with mock.patch(
            "public.services.razorpay.create_order", return_value={"id": "order_R"}
        ) as create:
            checkout_service.start_online_payment(self.order)
        self.assertEqual(create.call_args.kwargs["receipt"], self.order.order_number)
        self.assertEqual(create.call_args.kwargs["amount"], Decimal("3000.00"))

    def test_gateway_failure(self):
        with mock.patch("public.services.razorpay.create_order", side_effect=RazorpayError("boom")):
            with self.assertRaises(checkout_service.GatewayError):
                checkout_service.start_online_payment(self.order)

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)
        attempt = self.order.payment_attempts.get()
        self.assertEqual(attempt.status, PaymentAttempt.STATUS_FAILED)
        self.assertIsNone(attempt.gateway_order_id)


class VerifyPaymentTests(PaymentFixtureMixin, TestCase):
    """
    GUARANTEES:
    - a valid signature marks the attempt verified and the order paid
    - verifying twice is harmless (customer total_spent counted once)
    - a bad signature records a failure and never marks paid
    """

    def test_valid_signature_marks_paid(self):
        self._start()
        order = payments.verify_checkout_payment(
            gateway_order_id="order_TEST1", payment_id="pay_1", signature=sign("order_TEST1", "pay_1")
        )

        self.assertEqual(order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(order.payment_id, "pay_1")
        attempt = PaymentAttempt.objects.get(gateway_order_id="order_TEST1")
        self.assertEqual(attempt.status, PaymentAttempt.STATUS_VERIFIED)
        self.assertIsNotNone(attempt.verified_at)

    def test_verify_is_idempotent(self):
        self._start()
        for _ in range(2):
            payments.verify_checkout_payment(
                gateway_order_id="order_TEST1", payment_id="pay_1", signature=sign("order_TEST1", "pay_1")
            )

        customer = Customer.objects.get(phone="9876501234")
        self.assertEqual(customer.total_spent, Decimal("3000.00"))

    def test_bad_signature(self):
        self._start()
        with self.assertRaises(payments.SignatureMismatchError):
            payments.verify_checkout_payment(gateway_order_id="order_TEST1", payment_id="pay_1", signature="nope")

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_FAILED)
        attempt = PaymentAttempt.objects.get(gateway_order_id="order_TEST1")
        self.assertEqual(attempt.status, PaymentAttempt.STATUS_FAILED)

    def test_unknown_gateway_order(self):
        with self.assertRaises(payments.UnknownPaymentError):
            payments.verify_checkout_payment(gateway_order_id="order_NOPE", payment_id="p", signature="s")

    def test_failure_after_paid_is_ignored(self):
        self._start()
        payments.verify_checkout_payment(
            gateway_order_id="order_TEST1", payment_id="pay_1", signature=sign("order_TEST1", "pay_1")
        )
        order = payments.record_checkout_failure(gateway_order_id="order_TEST1", reason="closed")
        self.assertEqual(order.payment_status, Order.PAYMENT_PAID)

    def test_record_failure(self):
        self._start()
        order = payments.record_checkout_failure(gateway_order_id="order_TEST1", reason="Card declined")

        self.assertEqual(order.payment_status, Order.PAYMENT_FAILED)
        attempt = PaymentAttempt.objects.get(gateway_order_id="order_TEST1")
        self.assertEqual(attempt.failure_reason, "Card declined")


class WebhookEventTests(PaymentFixtureMixin, TestCase):
    """
    GUARANTEES:
    - payment.captured / order.paid mark paid when the amount matches
    - amount mismatches never mark paid
    - payment.failed marks failed
    - repeats and unknown orders are acknowledged
    """

    def _event(self, event, *, amount=300000, order_id="order_TEST1"):
        return {
            "event": event,
            "payload": {
                "payment": {"entity": {"id": "pay_W1", "order_id": order_id, "amount": amount}},
            },
        }

    def test_captured_marks_paid(self):
        self._start()
        out = payments.process_webhook_event(self._event("payment.captured"))

        self.assertTrue(out["ok"])
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.payment_id, "pay_W1")

    def test_order_paid_uses_amount_paid(self):
        self._start()
        event = {
            "event": "order.paid",
            "payload": {
                "payment": {"entity": {"id": "pay_W2", "order_id": "order_TEST1", "amount": 300000}},
                "order": {"entity": {"id": "order_TEST1", "amount_paid": 300000}},
            },
        }
        payments.process_webhook_event(event)
        self.order.refresh_from_db()
        self.assertTrue(self.order.is_paid)

    def test_amount_mismatch(self):
        self._start()
        out = payments.process_webhook_event(self._event("payment.captured", amount=100))

        self.assertFalse(out["ok"])
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)

    def test_repeat_is_acknowledged(self):
        self._start()
        payments.process_webhook_event(self._event("payment.captured"))
        out = payments.process_webhook_event(self._event("payment.captured"))
        self.assertEqual(out["detail"], "Already processed")

    def test_payment_failed(self):
        self._start()
        payments.process_webhook_event(self._event("payment.failed"))
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_FAILED)

    def test_unknown_order_and_event(self):
        self.assertTrue(payments.process_webhook_event(self._event("payment.captured", order_id="order_X"))["ok"])
        self.assertTrue(payments.process_webhook_event(self._event("refund.created"))["ok"])


class RetryPaymentTests(PaymentFixtureMixin, TestCase):
    def test_retry_after_failure(self):
        self._start()
        payments.record_checkout_failure(gateway_order_id="order_TEST1", reason="closed")

        with mock.patch("public.services.razorpay.create_order", return_value={"id": "order_TEST2"}):
            payload = checkout_service.retry_online_payment(Order.objects.get(pk=self.order.pk))

        self.assertEqual(payload["order_id"], "order_TEST2")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(self.order.payment_attempts.count(), 2)

    def test_retry_paid_order_refused(self):
        order_service.mark_order_paid(self.order, payment_id="pay_manual")
        with self.assertRaises(PaymentError):
            checkout_service.retry_online_payment(Order.objects.get(pk=self.order.pk))
