# products/tests/test_stock.py

from decimal import Decimal

from django.test import TestCase

from products.models import Product
from products.services.exceptions import InsufficientStockError, ProductUnavailableError
from products.services.stock import reserve_stock, restore_stock, to_int_qty


class ProductStockTests(TestCase):
    """
    Stock-level tests.

    GUARANTEES:
    - Stock never goes negative
    - A shortfall on any line leaves every product untouched
    - Inactive products cannot be reserved
    - Restoring stock skips products that no longer exist
    """

    def setUp(self):
        self.chakkar = Product.objects.create(
            product_code="H200",
            product_name="Ground Chakkar",
            mrp=Decimal("300.00"),
            discount=Decimal("50"),
            stock=10,
        )
        self.pencil = Product.objects.create(
            product_code="H201",
            product_name="Colour Pencil",
            mrp=Decimal("120.00"),
            discount=Decimal("50"),
            stock=3,
        )

    def _stock(self, product):
        product.refresh_from_db()
        return product.stock

    def test_reserve_decrements(self):
        reserve_stock([("h200", 4), ("H201", 3)])
        self.assertEqual(self._stock(self.chakkar), 6)
        self.assertEqual(self._stock(self.pencil), 0)

    def test_repeated_codes_are_merged(self):
        with self.assertRaises(InsufficientStockError):
            reserve_stock([("H201", 2), ("H201", 2)])
        self.assertEqual(self._stock(self.pencil), 3)

    def test_shortfall_is_all_or_nothing(self):
        with self.assertRaises(InsufficientStockError):
            reserve_stock([("H200", 4), ("H201", 5)])
        self.assertEqual(self._stock(self.chakkar), 10)
        self.assertEqual(self._stock(self.pencil), 3)

    def test_inactive_product_unavailable(self):
        self.chakkar.status = Product.STATUS_INACTIVE
        self.chakkar.save()
        with self.assertRaises(ProductUnavailableError):
            reserve_stock([("H200", 1)])

    def test_unknown_code_unavailable(self):
        with self.assertRaises(ProductUnavailableError):
            reserve_stock([("NOPE", 1)])

    def test_restore(self):
        reserve_stock([("H200", 4)])
        restore_stock([("H200", 4), ("GONE", 2)])
        self.assertEqual(self._stock(self.chakkar), 10)

    def test_quantities_are_whole_units(self):
        self.assertEqual(to_int_qty("7"), 7)
        with self.assertRaises(ValueError):
            to_int_qty(1.5)
        with self.assertRaises(ValueError):
            to_int_qty(True)
