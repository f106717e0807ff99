# content/services/payment_settings.py

"""
PAYMENT SETTINGS SERVICE

Purpose:
- Read payment configuration with env fallbacks for gateway keys
- Admin listing with secrets masked
- Upsert that keeps a stored secret when its masked value is sent back
- Public payment info for the storefront (never secrets)
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction

from content.models import PaymentSetting

logger = logging.getLogger(__name__)

MASK = "********"

DEFAULT_PAYMENT_INSTRUCTIONS = (
    "Please complete your payment using the QR code or bank details provided. "
    "Once payment is done, confirmation will be updated by our team."
)

TRUE_VALUES = {"true", "1", "yes", "on"}


def mask_secret(value: str) -> str:
    value = value or ""
    if not value:
        return ""
    if len(value) <= 4:
        return MASK
    return f"{MASK}{value[-4:]}"


def is_masked(value) -> bool:
    return isinstance(value, str) and value.startswith(MASK)


def payment_settings_map() -> dict[str, str]:
    return {p.key: p.value for p in PaymentSetting.objects.all()}


def _gateway_env() -> dict:
    return (getattr(settings, "PAYMENTS", {}) or {}).get("RAZORPAY", {}) or {}


def razorpay_credentials(values: dict[str, str] | None = None) -> dict:
    """
    DB rows win; env (PAYMENTS["RAZORPAY"]) fills blanks.
    """
    values = values if values is not None else payment_settings_map()
    env = _gateway_env()

    key_id = (values.get(PaymentSetting.KEY_RAZORPAY_KEY_ID) or "").strip() or env.get("KEY_ID", "")
    key_secret = (values.get(PaymentSetting.KEY_RAZORPAY_KEY_SECRET) or "").strip() or env.get("KEY_SECRET", "")
    webhook_secret = (
        (values.get(PaymentSetting.KEY_RAZORPAY_WEBHOOK_SECRET) or "").strip()
        or env.get("WEBHOOK_SECRET", "")
    )

    raw_enabled = values.get(PaymentSetting.KEY_RAZORPAY_ENABLED)
    if raw_enabled is None:
        enabled = bool(key_id and key_secret)
    else:
        enabled = str(raw_enabled).strip().lower() in TRUE_VALUES

    return {
        "enabled": enabled and bool(key_id and key_secret),
        "key_id": key_id,
        "key_secret": key_secret,
        "webhook_secret": webhook_secret,
        "currency": env.get("CURRENCY", "INR"),
    }


def admin_payment_settings() -> list[dict]:
    rows = {p.key: p for p in PaymentSetting.objects.all()}
    out = []
    for key in PaymentSetting.KNOWN_KEYS:
        row = rows.get(key)
        value = row.value if row else ""
        if key == PaymentSetting.KEY_PAYMENT_INSTRUCTIONS and not value:
            value = DEFAULT_PAYMENT_INSTRUCTIONS
        out.append(
            {
                "key": key,
                "value": mask_secret(value) if key in PaymentSetting.SECRET_KEYS else value,
                "is_secret": key in PaymentSetting.SECRET_KEYS,
                "is_set": bool(row and row.value),
                "updated_at": row.updated_at if row else None,
            }
        )
    return out


@transaction.atomic
def upsert_payment_settings(items) -> list[str]:
    """
    items: iterable of {"key", "value"}. Returns the keys actually written.
    A masked secret means "unchanged" and is skipped.
    """
    written = []
    for item in items:
        key = item["key"]
        value = "" if item.get("value") is None else str(item["value"]).strip()

        if key in PaymentSetting.SECRET_KEYS and is_masked(value):
            continue

        PaymentSetting.objects.update_or_create(key=key, defaults={"value": value})
        written.append(key)

    # key names only; values may be secrets
    logger.info("Payment settings updated", extra={"keys": written})
    return written


def public_payment_info() -> dict:
    values = payment_settings_map()
    creds = razorpay_credentials(values)

    return {
        "razorpay_enabled": creds["enabled"],
        "razorpay_key_id": creds["key_id"] if creds["enabled"] else "",
        "currency": creds["currency"],
        "bank_details": {
            "bank_name": values.get(PaymentSetting.KEY_BANK_NAME, ""),
            "account_number": values.get(PaymentSetting.KEY_ACCOUNT_NUMBER, ""),
            "ifsc_code": values.get(PaymentSetting.KEY_IFSC_CODE, ""),
            "branch_name": values.get(PaymentSetting.KEY_BRANCH_NAME, ""),
        },
        "payment_qr_code": values.get(PaymentSetting.KEY_PAYMENT_QR_CODE, ""),
        "payment_instructions": values.get(PaymentSetting.KEY_PAYMENT_INSTRUCTIONS) or DEFAULT_PAYMENT_INSTRUCTIONS,
    }
