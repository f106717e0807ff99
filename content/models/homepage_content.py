# content/models/homepage_content.py

import uuid

from django.db import models


class HomepageContent(models.Model):
    """
    One JSON block per homepage section (hero, about, transport, ...).
    The storefront owns the shape of `content`.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    section_name = models.CharField(max_length=100, unique=True)
    content = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["section_name"]
        verbose_name_plural = "homepage content"

    def __str__(self):
        return self.section_name
