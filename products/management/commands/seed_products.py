import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from products.models import Category, GiftBox, Product


CATEGORIES = [
    ("Fancy Crackers", 1),
    ("Bijili Crackers", 2),
    ("Sparklers", 3),
    ("Twinkling Star", 4),
    ("Ground Chakkars", 5),
    ("Rockets", 6),
]

PRODUCTS = [
    # code, name, category, user_for, content, mrp, discount
    ("H001", "Flower Pots Deluxe", "Fancy Crackers", "Family", "Pack of 5", 500, 90),
    ("H002", "Atom Bomb Premium", "Bijili Crackers", "Adult", "Single piece", 1000, 90),
    ("H003", "Safe Sparklers", "Sparklers", "Kids", "Pack of 10", 200, 90),
    ("H004", "Twinkling Star Special", "Twinkling Star", "Adult", "Pack of 3", 800, 90),
    ("H005", "Ground Chakra Mega", "Ground Chakkars", "Family", "Single piece", 600, 90),
    ("H006", "Colour Sparklers 15cm", "Sparklers", "Kids", "Pack of 10", 150, 85),
    ("H007", "Red Bijili 100", "Bijili Crackers", "Adult", "100 pcs", 400, 80),
    ("H008", "Lunik Rocket", "Rockets", "Adult", "Pack of 10", 900, 85),
    ("H009", "Whistling Wheel", "Ground Chakkars", "Family", "Pack of 10", 350, 80),
    ("H010", "Peacock Fountain", "Fancy Crackers", "Family", "Single piece", 1200, 85),
]

GIFT_BOXES = [
    (
        "₹1,000 Gift Box",
        Decimal("1000"),
        Decimal("2500"),
        "Perfect starter pack for small celebrations",
        ["Family-friendly crackers", "Sparklers included", "Safe for kids", "Free delivery"],
        "Popular",
        "bg-brand-gold text-black",
    ),
    (
        "₹3,000 Gift Box",
        Decimal("3000"),
        Decimal("7500"),
        "Complete celebration package for the whole family",
        ["Premium assorted crackers", "Fancy fireworks", "Ground chakras", "Aerial shots"],
        "Best Value",
        "bg-brand-red text-white",
    ),
    (
        "₹5,000 Gift Box",
        Decimal("5000"),
        Decimal("12500"),
        "Luxury celebration box for grand festivities",
        ["Deluxe cracker collection", "Professional grade", "Sky shots included", "Premium packaging"],
        "Premium",
        "bg-brand-purple text-white",
    ),
]


class Command(BaseCommand):
    help = "Seed categories, crackers catalog and gift boxes"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        category_objs = {}
        for name, order in CATEGORIES:
            obj, _ = Category.objects.get_or_create(
                name=name, defaults={"display_order": order}
            )
            category_objs[name] = obj

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        for code, name, cat, user_for, content, mrp, discount in PRODUCTS:
            Product.objects.get_or_create(
                product_code=code,
                defaults={
                    "product_name": name,
                    "category": category_objs[cat],
                    "user_for": user_for,
                    "content": content,
                    "mrp": Decimal(mrp),
                    "discount": Decimal(discount),
                    "stock": random.randint(100, 500),
                    "featured": code in {"H001", "H002", "H003"},
                },
            )

        # -------------------------------
        # GIFT BOXES
        # -------------------------------
        for order, (title, price, original, desc, features, badge, color) in enumerate(GIFT_BOXES):
            if GiftBox.objects.filter(title=title).exists():
                continue
            GiftBox.objects.create(
                title=title,
                price=price,
                original_price=original,
                description=desc,
                features=features,
                badge=badge,
                badge_color=color,
                display_order=order,
            )

        self.stdout.write(self.style.SUCCESS("✅ Catalog seeded successfully."))
