# products/services/pricing.py

"""
PRICING HELPERS

- All money is Decimal, 2dp, ROUND_HALF_UP (never float).
- final_rate = mrp * (1 - discount/100)
- gift box discount = round((1 - price/original_price) * 100), whole percent
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
HUNDRED = Decimal("100")


def money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def parse_decimal(v, *, field: str) -> Decimal:
    """
    Lenient parser for spreadsheet/form input: accepts numbers, "1,250.50",
    "₹ 300" and "40%". Raises ValueError naming the field.
    """
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError(f"{field} is required")

    if isinstance(v, bool):
        raise ValueError(f"{field} must be a number")

    raw = str(v).strip().replace(",", "").replace("₹", "").replace("%", "").strip()
    try:
        d = Decimal(raw)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"{field} must be a number") from exc
    if not d.is_finite():
        raise ValueError(f"{field} must be a number")
    return d


def compute_final_rate(mrp, discount) -> Decimal:
    mrp_d = money(mrp)
    disc = Decimal(str(discount if discount not in (None, "") else 0))
    if disc < 0 or disc > HUNDRED:
        raise ValueError("discount must be between 0 and 100")
    return money(mrp_d * (Decimal("1") - disc / HUNDRED))


def gift_box_discount(price, original_price) -> int:
    original = Decimal(str(original_price or 0))
    if original <= 0:
        return 0
    pct = (Decimal("1") - Decimal(str(price or 0)) / original) * HUNDRED
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def line_total(unit_price, quantity) -> Decimal:
    return money(Decimal(str(unit_price or 0)) * Decimal(int(quantity or 0)))
