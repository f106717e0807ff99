# cart/tests/test_cart_service.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from cart.models import Cart, CartItem
from cart.services import cart as cart_service
from cart.services.exceptions import MinimumOrderError
from content.models import SiteSetting
from products.models import Product
from products.services.exceptions import ProductUnavailableError

User = get_user_model()


class CartServiceTests(TestCase):
    """
    GUARANTEES:
    - total is always sum(unit_price * quantity)
    - adding an existing product increments its line
    - removing the last unit removes the line
    - inactive products are never added
    """

    def setUp(self):
        self.sparkler = Product.objects.create(
            product_code="H003",
            product_name="Electric Sparklers",
            mrp=Decimal("200.00"),
            final_rate=Decimal("80.00"),
            stock=100,
        )
        self.chakkar = Product.objects.create(
            product_code="H004",
            product_name="Ground Chakkar",
            mrp=Decimal("450.00"),
            final_rate=Decimal("125.50"),
            stock=100,
        )
        self.cart = cart_service.get_cart(client_id="browser-1")

    def test_total_is_sum_of_lines(self):
        cart_service.add_item(self.cart, product_code="H003", quantity=3)
        cart_service.add_item(self.cart, product_code="H004", quantity=2)

        summary = cart_service.cart_summary(self.cart)
        self.assertEqual(summary["total"], Decimal("491.00"))
        self.assertEqual(summary["item_count"], 5)
        self.assertEqual(self.cart.total_amount, Decimal("491.00"))

    def test_adding_existing_product_increments(self):
        cart_service.add_item(self.cart, product_code="H003", quantity=2)
        cart_service.add_item(self.cart, product_code="h003", quantity=1)

        self.assertEqual(self.cart.items.count(), 1)
        self.assertEqual(self.cart.items.get().quantity, 3)

    def test_adding_refreshes_price_snapshot(self):
        cart_service.add_item(self.cart, product_code="H003")
        self.sparkler.final_rate = Decimal("75.00")
        self.sparkler.save()

        item = cart_service.add_item(self.cart, product_code="H003")
        self.assertEqual(item.unit_price, Decimal("75.00"))

    def test_decrement_last_unit_removes_line(self):
        cart_service.add_item(self.cart, product_code="H003", quantity=2)

        item = cart_service.decrement_item(self.cart, product_code="H003")
        self.assertEqual(item.quantity, 1)

        self.assertIsNone(cart_service.decrement_item(self.cart, product_code="H003"))
        self.assertFalse(CartItem.objects.filter(cart=self.cart).exists())

    def test_set_quantity_zero_removes_line(self):
        cart_service.add_item(self.cart, product_code="H004", quantity=4)
        self.assertIsNone(cart_service.set_quantity(self.cart, product_code="H004", quantity=0))
        self.assertTrue(self.cart.is_empty)

    def test_set_quantity_adds_missing_line(self):
        item = cart_service.set_quantity(self.cart, product_code="H004", quantity=6)
        self.assertEqual(item.quantity, 6)

    def test_inactive_product_rejected(self):
        self.sparkler.status = Product.STATUS_INACTIVE
        self.sparkler.save()

        with self.assertRaises(ProductUnavailableError):
            cart_service.add_item(self.cart, product_code="H003")

    def test_non_positive_add_rejected(self):
        with self.assertRaises(ValueError):
            cart_service.add_item(self.cart, product_code="H003", quantity=0)

    def test_clear(self):
        cart_service.add_item(self.cart, product_code="H003")
        cart_service.add_item(self.cart, product_code="H004")
        cart_service.clear_cart(self.cart)
        self.assertTrue(self.cart.is_empty)


class CartOwnershipTests(TestCase):
    def test_one_cart_per_client(self):
        first = cart_service.get_cart(client_id="abc")
        second = cart_service.get_cart(client_id="abc")
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(Cart.objects.count(), 1)

    def test_one_cart_per_user(self):
        user = User.objects.create_user(email="buyer@example.com", password="pass1234")
        first = cart_service.get_cart(user=user)
        second = cart_service.get_cart(user=user)
        self.assertEqual(first.pk, second.pk)

    def test_cart_without_owner_rejected(self):
        with self.assertRaises(ValidationError):
            Cart.objects.create(client_id="  ")

    def test_no_create(self):
        self.assertIsNone(cart_service.get_cart(client_id="missing", create=False))


class MinimumOrderTests(TestCase):
    def test_default_minimum(self):
        with self.assertRaises(MinimumOrderError) as ctx:
            cart_service.assert_minimum_order(Decimal("2999.99"))
        self.assertEqual(ctx.exception.minimum, Decimal("3000.00"))

        cart_service.assert_minimum_order(Decimal("3000.00"))

    def test_site_setting_overrides(self):
        SiteSetting.objects.create(key="minimum_order", value="1,500")
        cart_service.assert_minimum_order(Decimal("1500"))
        with self.assertRaises(MinimumOrderError):
            cart_service.assert_minimum_order(Decimal("1499"))

    def test_summary_reports_minimum(self):
        cart = cart_service.get_cart(client_id="x1")
        summary = cart_service.cart_summary(cart)
        self.assertFalse(summary["meets_minimum"])
        self.assertEqual(summary["minimum_order"], Decimal("3000.00"))
