# content/services/notifications.py

"""
STOREFRONT NOTIFICATIONS

The "category updates" notification lists active categories (first 3
plus a count of the rest) until the owner dismisses it. Dismissals are
stored per user, or per anonymous client_id.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from content.models import NotificationDismissal
from products.models import Category

logger = logging.getLogger(__name__)

PREVIEW_COUNT = 3

KNOWN_NOTIFICATIONS = {NotificationDismissal.KEY_CATEGORY_UPDATES}


def _owner_filter(*, user=None, client_id: str = "") -> dict:
    if user is not None:
        return {"user": user}
    return {"user__isnull": True, "client_id": client_id}


def is_dismissed(key: str, *, user=None, client_id: str = "") -> bool:
    if user is None and not client_id:
        return False
    return NotificationDismissal.objects.filter(
        notification_key=key, **_owner_filter(user=user, client_id=client_id)
    ).exists()


def dismiss(key: str, *, user=None, client_id: str = "") -> NotificationDismissal:
    """
    Idempotent: dismissing twice returns the existing row.
    """
    lookup = {"notification_key": key, **_owner_filter(user=user, client_id=client_id)}
    existing = NotificationDismissal.objects.filter(**lookup).first()
    if existing is not None:
        return existing

    row = NotificationDismissal(
        notification_key=key,
        user=user,
        client_id="" if user is not None else client_id,
    )
    row.full_clean(validate_constraints=False)
    try:
        with transaction.atomic():
            row.save()
    except IntegrityError:
        # concurrent dismiss from another tab
        return NotificationDismissal.objects.get(**lookup)

    logger.info("Notification dismissed", extra={"key": key})
    return row


def category_updates(*, user=None, client_id: str = "") -> dict:
    key = NotificationDismissal.KEY_CATEGORY_UPDATES
    names = list(
        Category.objects.filter(status=Category.STATUS_ACTIVE)
        .order_by("display_order", "name")
        .values_list("name", flat=True)
    )
    dismissed = is_dismissed(key, user=user, client_id=client_id)

    return {
        "key": key,
        "show": bool(names) and not dismissed,
        "dismissed": dismissed,
        "categories": names[:PREVIEW_COUNT],
        "more_count": max(len(names) - PREVIEW_COUNT, 0),
        "total_categories": len(names),
    }
