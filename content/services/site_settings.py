# content/services/site_settings.py

"""
SITE SETTINGS SERVICE

Purpose:
- Typed reads over SiteSetting (minimum order, countdown)
- Bulk upsert by key
- Public site payload for the storefront

Rules:
- Missing or malformed minimum_order falls back to settings.MINIMUM_ORDER_AMOUNT
- The countdown block is only published when a target date is set and
  countdown_is_active is not "false"
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction

from content.models import HomepageContent, SiteSetting

logger = logging.getLogger(__name__)

FALSE_VALUES = {"false", "0", "no", "off"}


def get_setting(key: str, default: str = "") -> str:
    row = SiteSetting.objects.filter(key=key).only("value").first()
    if row is None:
        return default
    return row.value


def settings_map(keys=None) -> dict[str, str]:
    qs = SiteSetting.objects.all()
    if keys is not None:
        qs = qs.filter(key__in=list(keys))
    return {s.key: s.value for s in qs}


def _fallback_minimum() -> Decimal:
    return Decimal(str(getattr(settings, "MINIMUM_ORDER_AMOUNT", "3000.00"))).quantize(Decimal("0.01"))


def minimum_order_amount() -> Decimal:
    raw = (get_setting(SiteSetting.KEY_MINIMUM_ORDER) or "").strip().replace(",", "")
    if not raw:
        return _fallback_minimum()
    try:
        value = Decimal(raw)
    except InvalidOperation:
        logger.warning("Invalid minimum_order setting; using fallback", extra={"value": raw})
        return _fallback_minimum()
    if not value.is_finite() or value < 0:
        logger.warning("Invalid minimum_order setting; using fallback", extra={"value": raw})
        return _fallback_minimum()
    return value.quantize(Decimal("0.01"))


@transaction.atomic
def upsert_settings(items) -> list[SiteSetting]:
    """
    items: iterable of {"key", "value", "description"?}
    Existing descriptions are kept when none is supplied.
    """
    saved = []
    for item in items:
        key = (item.get("key") or "").strip()
        defaults = {"value": "" if item.get("value") is None else str(item.get("value"))}
        if item.get("description"):
            defaults["description"] = item["description"]
        row, _ = SiteSetting.objects.update_or_create(key=key, defaults=defaults)
        saved.append(row)

    logger.info("Site settings updated", extra={"keys": [s.key for s in saved]})
    return saved


def countdown_payload(values: dict[str, str] | None = None) -> dict | None:
    values = values if values is not None else settings_map(SiteSetting.COUNTDOWN_KEYS)

    target = (values.get(SiteSetting.KEY_COUNTDOWN_TARGET_DATE) or "").strip()
    active = (values.get(SiteSetting.KEY_COUNTDOWN_IS_ACTIVE) or "true").strip().lower()
    if not target or active in FALSE_VALUES:
        return None

    return {
        "title": values.get(SiteSetting.KEY_COUNTDOWN_TITLE, ""),
        "description": values.get(SiteSetting.KEY_COUNTDOWN_DESCRIPTION, ""),
        "target_date": target,
        "festival_name": values.get(SiteSetting.KEY_COUNTDOWN_FESTIVAL_NAME, ""),
        "is_active": True,
    }


def public_site_payload() -> dict:
    values = settings_map(SiteSetting.PUBLIC_KEYS + SiteSetting.COUNTDOWN_KEYS)

    public = {k: values[k] for k in SiteSetting.PUBLIC_KEYS if k in values}
    public.setdefault(SiteSetting.KEY_SITE_NAME, getattr(settings, "STORE_NAME", "Hello Crackers"))
    public[SiteSetting.KEY_MINIMUM_ORDER] = str(minimum_order_amount())

    sections = {
        h.section_name: h.content
        for h in HomepageContent.objects.filter(is_active=True)
    }

    return {
        "settings": public,
        "countdown": countdown_payload(values),
        "homepage": sections,
    }
