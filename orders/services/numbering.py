# orders/services/numbering.py

"""
CHALLAN NUMBERING

- If the default challan template has auto_increment on:
    <prefix><n>, n = max(starting_number, highest issued + 1)
- Otherwise: HC<year><6 random digits>, retried until unused

Must be called inside the placement transaction. Sequential allocation
locks the default template row until that transaction ends. The unique
constraint on Order.challan_number is the final guard; place_order retries
with a fresh number when it trips.
"""

from __future__ import annotations

import re
import secrets

from django.utils import timezone

from content.models import ChallanTemplate
from content.services.challan_templates import get_default_template, merged_template_data
from orders.models import Order

MAX_RANDOM_ATTEMPTS = 20


def _random_number() -> str:
    year = timezone.localdate().year
    for _ in range(MAX_RANDOM_ATTEMPTS):
        candidate = f"HC{year}{secrets.randbelow(1_000_000):06d}"
        if not Order.objects.filter(challan_number=candidate).exists():
            return candidate
    raise RuntimeError("Could not allocate a unique challan number")


def _sequential_number(prefix: str, starting_number: int) -> str:
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    highest = starting_number - 1

    issued = Order.objects.filter(challan_number__startswith=prefix).values_list("challan_number", flat=True)
    for number in issued:
        m = pattern.match(number or "")
        if m:
            highest = max(highest, int(m.group(1)))

    return f"{prefix}{highest + 1}"


def next_challan_number() -> str:
    template = get_default_template(ChallanTemplate.TYPE_CHALLAN)
    cfg = merged_template_data(template).get("challan_settings") or {}

    if not cfg.get("auto_increment"):
        return _random_number()

    # serialises sequential allocation across concurrent placements
    ChallanTemplate.objects.select_for_update().filter(pk=template.pk).first()

    prefix = str(cfg.get("prefix") or "CH").strip() or "CH"
    try:
        start = int(cfg.get("starting_number") or 1)
    except (TypeError, ValueError):
        start = 1
    return _sequential_number(prefix, max(start, 1))
