# content/models/site_setting.py

import uuid

from django.db import models


class SiteSetting(models.Model):
    """
    Key/value storefront setting editable from the admin console.

    Values are stored as text; typed readers live in
    content.services.site_settings.
    """

    KEY_SITE_NAME = "site_name"
    KEY_SITE_TAGLINE = "site_tagline"
    KEY_CONTACT_PHONE = "contact_phone"
    KEY_CONTACT_EMAIL = "contact_email"
    KEY_MINIMUM_ORDER = "minimum_order"
    KEY_DELIVERY_INFO = "delivery_info"
    KEY_FACTORY_DISCOUNT = "factory_discount"

    KEY_COUNTDOWN_TITLE = "countdown_title"
    KEY_COUNTDOWN_DESCRIPTION = "countdown_description"
    KEY_COUNTDOWN_TARGET_DATE = "countdown_target_date"
    KEY_COUNTDOWN_IS_ACTIVE = "countdown_is_active"
    KEY_COUNTDOWN_FESTIVAL_NAME = "countdown_festival_name"

    GENERAL_KEYS = (KEY_SITE_NAME, KEY_SITE_TAGLINE)
    CONTACT_KEYS = (KEY_CONTACT_PHONE, KEY_CONTACT_EMAIL)
    BUSINESS_KEYS = (KEY_MINIMUM_ORDER, KEY_DELIVERY_INFO, KEY_FACTORY_DISCOUNT)
    COUNTDOWN_KEYS = (
        KEY_COUNTDOWN_TITLE,
        KEY_COUNTDOWN_DESCRIPTION,
        KEY_COUNTDOWN_TARGET_DATE,
        KEY_COUNTDOWN_IS_ACTIVE,
        KEY_COUNTDOWN_FESTIVAL_NAME,
    )

    PUBLIC_KEYS = GENERAL_KEYS + CONTACT_KEYS + BUSINESS_KEYS

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True, default="")
    description = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def save(self, *args, **kwargs):
        self.key = (self.key or "").strip()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.key}={self.value[:40]}"
