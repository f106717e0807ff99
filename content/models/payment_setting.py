# content/models/payment_setting.py

import uuid

from django.db import models


class PaymentSetting(models.Model):
    """
    Payment configuration row (admin only).

    Secret keys are never returned in clear text by the API; see
    content.services.payment_settings.
    """

    KEY_RAZORPAY_ENABLED = "razorpay_enabled"
    KEY_RAZORPAY_KEY_ID = "razorpay_key_id"
    KEY_RAZORPAY_KEY_SECRET = "razorpay_key_secret"
    KEY_RAZORPAY_WEBHOOK_SECRET = "razorpay_webhook_secret"
    KEY_BANK_NAME = "bank_name"
    KEY_ACCOUNT_NUMBER = "account_number"
    KEY_IFSC_CODE = "ifsc_code"
    KEY_BRANCH_NAME = "branch_name"
    KEY_PAYMENT_QR_CODE = "payment_qr_code"
    KEY_PAYMENT_INSTRUCTIONS = "payment_instructions"

    KNOWN_KEYS = (
        KEY_RAZORPAY_ENABLED,
        KEY_RAZORPAY_KEY_ID,
        KEY_RAZORPAY_KEY_SECRET,
        KEY_RAZORPAY_WEBHOOK_SECRET,
        KEY_BANK_NAME,
        KEY_ACCOUNT_NUMBER,
        KEY_IFSC_CODE,
        KEY_BRANCH_NAME,
        KEY_PAYMENT_QR_CODE,
        KEY_PAYMENT_INSTRUCTIONS,
    )

    SECRET_KEYS = (KEY_RAZORPAY_KEY_SECRET, KEY_RAZORPAY_WEBHOOK_SECRET)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    @property
    def is_secret(self) -> bool:
        return self.key in self.SECRET_KEYS

    def __str__(self):
        return self.key
