# orders/tests/test_api.py

"""
ADMIN ORDERS API TESTS
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from orders.models import Customer, Order
from orders.services import order_service
from products.models import Product

User = get_user_model()

ORDERS_URL = "/api/orders/orders/"
CUSTOMERS_URL = "/api/orders/customers/"
DASHBOARD_URL = "/api/orders/dashboard/"


class OrdersApiTestBase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(email="manager@example.com", password="pass1234", role="manager")
        self.staff = User.objects.create_user(email="staff@example.com", password="pass1234", role="staff")
        self.customer_user = User.objects.create_user(email="buyer@example.com", password="pass1234")

        self.product = Product.objects.create(
            product_code="H010",
            product_name="Color Peacock",
            mrp=Decimal("1500.00"),
            final_rate=Decimal("1000.00"),
            stock=50,
        )
        self.order = order_service.place_order(
            customer={"name": "Meena", "phone": "9000000001", "email": "meena@example.com"},
            items=[{"product_code": "H010", "quantity": 4}],
        )

    def _url(self, suffix=""):
        return f"{ORDERS_URL}{self.order.pk}/{suffix}"


class OrderPermissionTests(OrdersApiTestBase):
    """
    GUARANTEES:
    - customers never see the admin order list
    - staff can view and move orders
    """

    def test_customer_forbidden(self):
        self.client.force_authenticate(self.customer_user)
        self.assertEqual(self.client.get(ORDERS_URL).status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_can_list(self):
        self.client.force_authenticate(self.staff)
        resp = self.client.get(ORDERS_URL)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 1)

    def test_staff_cannot_edit_customers(self):
        customer = Customer.objects.get()
        self.client.force_authenticate(self.staff)
        resp = self.client.patch(f"{CUSTOMERS_URL}{customer.pk}/", {"name": "X"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)


class OrderAdminApiTests(OrdersApiTestBase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(self.manager)

    def test_retrieve_includes_items_and_timeline(self):
        resp = self.client.get(self._url())
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data["items"]), 1)
        self.assertEqual(resp.data["timeline"][0]["status"], Order.STATUS_CONFIRMED)
        self.assertEqual(resp.data["document_title"], "QUOTATION")

    def test_search_by_phone(self):
        resp = self.client.get(ORDERS_URL, {"search": "9000000001"})
        self.assertEqual(resp.data["count"], 1)
        resp = self.client.get(ORDERS_URL, {"search": "nobody"})
        self.assertEqual(resp.data["count"], 0)

    def test_filter_by_status(self):
        resp = self.client.get(ORDERS_URL, {"order_status": "delivered"})
        self.assertEqual(resp.data["count"], 0)

    def test_status_update_forward(self):
        resp = self.client.patch(
            self._url("status/"),
            {"order_status": "dispatched", "tracking_notes": "Left factory"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["order_status"], "dispatched")
        self.assertEqual(resp.data["tracking_notes"], "Left factory")

    def test_status_update_backward_conflict(self):
        self.client.patch(self._url("status/"), {"order_status": "delivered"}, format="json")
        resp = self.client.patch(self._url("status/"), {"order_status": "factory"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "INVALID_TRANSITION")

    def test_mark_paid_then_mark_failed_conflicts(self):
        resp = self.client.post(self._url("mark-paid/"), {"payment_id": "UTR991"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["payment_status"], "paid")
        self.assertEqual(resp.data["document_title"], "REMITTANCE & CHALLAN")

        resp = self.client.post(self._url("mark-failed/"), {}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "ALREADY_PAID")

    def test_challan_pdf_download(self):
        resp = self.client.get(self._url("challan/"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp["Content-Type"], "application/pdf")
        self.assertIn(f"Quotation_{self.order.challan_number}.pdf", resp["Content-Disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_paid_challan_filename(self):
        order_service.mark_order_paid(self.order)
        resp = self.client.get(self._url("challan/"))
        self.assertIn(f"Remittance_{self.order.challan_number}.pdf", resp["Content-Disposition"])

    def test_delete_restores_stock(self):
        resp = self.client.delete(self._url())
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 50)

    def test_customer_orders(self):
        customer = Customer.objects.get()
        resp = self.client.get(f"{CUSTOMERS_URL}{customer.pk}/orders/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]["order_number"], self.order.order_number)

    def test_customer_phone_must_be_unique(self):
        Customer.objects.create(name="Other", phone="9000000002")
        customer = Customer.objects.get(phone="9000000001")
        resp = self.client.patch(f"{CUSTOMERS_URL}{customer.pk}/", {"phone": "9000000002"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class DashboardApiTests(OrdersApiTestBase):
    def test_dashboard_counters(self):
        order_service.mark_order_paid(self.order)
        order_service.place_order(
            customer={"name": "Ravi", "phone": "9000000003"},
            items=[{"product_code": "H010", "quantity": 3}],
        )

        self.client.force_authenticate(self.staff)
        resp = self.client.get(DASHBOARD_URL)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["totalRevenue"], Decimal("4000.00"))
        self.assertEqual(resp.data["totalOrders"], 2)
        self.assertEqual(resp.data["activeProducts"], 1)
        self.assertEqual(resp.data["totalCustomers"], 2)
        self.assertEqual(resp.data["pendingOrders"], 2)
        self.assertEqual(len(resp.data["recentOrders"]), 2)

    def test_dashboard_requires_capability(self):
        self.client.force_authenticate(self.customer_user)
        self.assertEqual(self.client.get(DASHBOARD_URL).status_code, status.HTTP_403_FORBIDDEN)
