# content/models/notification_dismissal.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class NotificationDismissal(models.Model):
    """
    Records that an owner (signed-in user, else anonymous client_id)
    dismissed a storefront notification. Survives reloads and devices
    for signed-in users.
    """

    KEY_CATEGORY_UPDATES = "category_updates"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    notification_key = models.CharField(max_length=64)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notification_dismissals",
    )
    client_id = models.CharField(max_length=64, blank=True, default="")

    dismissed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-dismissed_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["notification_key", "user"],
                condition=models.Q(user__isnull=False),
                name="one_dismissal_per_user",
            ),
            models.UniqueConstraint(
                fields=["notification_key", "client_id"],
                condition=models.Q(user__isnull=True),
                name="one_dismissal_per_client",
            ),
        ]

    def clean(self):
        if self.user_id is None and not (self.client_id or "").strip():
            raise ValidationError("A dismissal needs a user or a client_id")

    def __str__(self):
        return f"{self.notification_key} dismissed by {self.user_id or self.client_id}"
