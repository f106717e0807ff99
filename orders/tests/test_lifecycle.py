# orders/tests/test_lifecycle.py

from django.test import SimpleTestCase

from orders.models import Order
from orders.services import order_lifecycle
from orders.services.exceptions import InvalidOrderTransitionError


class OrderStatusTransitionTests(SimpleTestCase):
    """
    GUARANTEES:
    - fulfilment only moves forward
    - any open order can be cancelled
    - delivered and cancelled are final
    """

    def test_forward_moves_allowed(self):
        self.assertTrue(
            order_lifecycle.can_transition(from_status=Order.STATUS_CONFIRMED, to_status=Order.STATUS_FACTORY)
        )
        self.assertTrue(
            order_lifecycle.can_transition(from_status=Order.STATUS_FACTORY, to_status=Order.STATUS_DELIVERED)
        )

    def test_backward_moves_rejected(self):
        self.assertFalse(
            order_lifecycle.can_transition(from_status=Order.STATUS_DISPATCHED, to_status=Order.STATUS_FACTORY)
        )
        self.assertFalse(
            order_lifecycle.can_transition(from_status=Order.STATUS_CONFIRMED, to_status=Order.STATUS_CONFIRMED)
        )

    def test_cancel_from_any_open_status(self):
        for status in (
            Order.STATUS_CONFIRMED,
            Order.STATUS_FACTORY,
            Order.STATUS_DISPATCHED,
            Order.STATUS_TRANSPORT,
        ):
            self.assertTrue(
                order_lifecycle.can_transition(from_status=status, to_status=Order.STATUS_CANCELLED)
            )

    def test_terminal_states_are_final(self):
        for status in (Order.STATUS_DELIVERED, Order.STATUS_CANCELLED):
            self.assertFalse(
                order_lifecycle.can_transition(from_status=status, to_status=Order.STATUS_CANCELLED)
            )
            self.assertFalse(
                order_lifecycle.can_transition(from_status=status, to_status=Order.STATUS_CONFIRMED)
            )

    def test_validate_transition_raises(self):
        order = Order(order_number="ORD1", order_status=Order.STATUS_DELIVERED)
        with self.assertRaises(InvalidOrderTransitionError):
            order_lifecycle.validate_transition(order=order, target_status=Order.STATUS_CANCELLED)


class PaymentTransitionTests(SimpleTestCase):
    def test_pending_can_become_paid_or_failed(self):
        for target in (Order.PAYMENT_PAID, Order.PAYMENT_FAILED):
            self.assertTrue(
                order_lifecycle.can_transition_payment(from_status=Order.PAYMENT_PENDING, to_status=target)
            )

    def test_failed_can_retry(self):
        self.assertTrue(
            order_lifecycle.can_transition_payment(from_status=Order.PAYMENT_FAILED, to_status=Order.PAYMENT_PAID)
        )
        self.assertTrue(
            order_lifecycle.can_transition_payment(from_status=Order.PAYMENT_FAILED, to_status=Order.PAYMENT_PENDING)
        )

    def test_paid_is_terminal(self):
        for target in (Order.PAYMENT_PENDING, Order.PAYMENT_FAILED):
            self.assertFalse(
                order_lifecycle.can_transition_payment(from_status=Order.PAYMENT_PAID, to_status=target)
            )


class TimelineTests(SimpleTestCase):
    def test_timeline_marks_completed_steps(self):
        order = Order(order_status=Order.STATUS_DISPATCHED)
        steps = order_lifecycle.timeline(order)

        self.assertEqual([s["status"] for s in steps], order_lifecycle.FULFILMENT_SEQUENCE)
        self.assertEqual([s["completed"] for s in steps], [True, True, True, False, False])
        self.assertEqual([s["status"] for s in steps if s["current"]], [Order.STATUS_DISPATCHED])

    def test_cancelled_timeline(self):
        steps = order_lifecycle.timeline(Order(order_status=Order.STATUS_CANCELLED))
        self.assertEqual([s["status"] for s in steps], [Order.STATUS_CONFIRMED, Order.STATUS_CANCELLED])
        self.assertTrue(steps[-1]["current"])
