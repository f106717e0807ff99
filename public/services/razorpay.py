# public/services/razorpay.py

"""
RAZORPAY CLIENT (urllib)

- create_order: POST /v1/orders with HTTP basic auth (key_id:key_secret)
- verify_payment_signature: checkout handler signature
      HMAC_SHA256(key_secret, "<order_id>|<payment_id>")
- verify_webhook_signature: X-Razorpay-Signature
      HMAC_SHA256(webhook_secret, raw_body)

Amounts are integer paise. Credentials are passed in by the caller
(content.services.payment_settings.razorpay_credentials) so admin-console
changes apply without a restart.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

RAZORPAY_BASE = "https://api.razorpay.com/v1"
DEFAULT_TIMEOUT = 20


class RazorpayError(Exception):
    """Gateway unreachable, rejected the request, or returned garbage."""


def to_paise(amount) -> int:
    try:
        rupees = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError("amount must be a valid Decimal") from exc
    return int((rupees * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _safe_preview(text: str, limit: int = 500) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _auth_header(key_id: str, key_secret: str) -> str:
    token = base64.b64encode(f"{key_id}:{key_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def _request_json(
    method: str,
    path: str,
    *,
    key_id: str,
    key_secret: str,
    body: dict | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    if not key_id or not key_secret:
        raise RazorpayError("Razorpay keys are not configured")

    data = json.dumps(body).encode("utf-8") if body is not None else None
    req = Request(
        f"{RAZORPAY_BASE}{path}",
        data=data,
        headers={
            "Authorization": _auth_header(key_id, key_secret),
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        method=method,
    )

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        raw = e.read().decode("utf-8", errors="replace") if e.fp is not None else ""
        try:
            err = (json.loads(raw) or {}).get("error") or {}
            msg = err.get("description") or err.get("code") or "Razorpay rejected request"
        except ValueError:
            msg = _safe_preview(raw) or str(e)
        raise RazorpayError(f"Razorpay HTTPError: {e.code} {msg}") from e
    except URLError as e:
        raise RazorpayError(f"Razorpay URLError: {e.reason}") from e
    except TimeoutError as e:
        raise RazorpayError("Razorpay request timed out") from e

    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise RazorpayError(f"Razorpay returned non-JSON: {_safe_preview(raw)}") from e

    if not isinstance(parsed, dict):
        raise RazorpayError("Razorpay returned an unexpected payload")
    return parsed


def create_order(
    *,
    key_id: str,
    key_secret: str,
    amount,
    currency: str = "INR",
    receipt: str,
    notes: dict | None = None,
) -> dict:
    """
    amount is in rupees; converted to paise here.
    Returns the Razorpay order object ({"id": "order_...", "amount", ...}).
    """
    payload: dict = {
        "amount": to_paise(amount),
        "currency": currency,
        "receipt": str(receipt)[:40],
    }
    if notes:
        payload["notes"] = notes

    order = _request_json("POST", "/orders", key_id=key_id, key_secret=key_secret, body=payload)
    if not order.get("id"):
        raise RazorpayError("Razorpay order response has no id")

    logger.info("Razorpay order created", extra={"gateway_order_id": order["id"], "receipt": payload["receipt"]})
    return order


def _hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_payment_signature(*, order_id: str, payment_id: str, signature: str, key_secret: str) -> bool:
    if not (order_id and payment_id and signature and key_secret):
        return False
    expected = _hmac_sha256(key_secret, f"{order_id}|{payment_id}".encode("utf-8"))
    return hmac.compare_digest(expected, str(signature).strip())


def verify_webhook_signature(*, raw_body: bytes, signature: str | None, webhook_secret: str) -> bool:
    if not signature or not webhook_secret:
        return False
    expected = _hmac_sha256(webhook_secret, raw_body or b"")
    return hmac.compare_digest(expected, str(signature).strip())
