# content/models/challan_template.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models, transaction


class ChallanTemplate(models.Model):
    """
    Layout/branding for generated challans and quotations.

    Rules:
    - at most one default template per type (DB constraint); saving a
      new default demotes the previous one
    - template_data sections: company_info, challan_settings, fields, footer
    """

    TYPE_CHALLAN = "challan"
    TYPE_QUOTATION = "quotation"

    TYPE_CHOICES = [
        (TYPE_CHALLAN, "Challan"),
        (TYPE_QUOTATION, "Quotation"),
    ]

    REQUIRED_SECTIONS = ("company_info", "challan_settings", "fields", "footer")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=150)
    template_type = models.CharField(max_length=16, choices=TYPE_CHOICES, default=TYPE_CHALLAN)
    is_default = models.BooleanField(default=False)
    template_data = models.JSONField(default=dict, blank=True)
    thumbnail_url = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["template_type"],
                condition=models.Q(is_default=True),
                name="one_default_template_per_type",
            )
        ]

    def clean(self):
        data = self.template_data or {}
        if not isinstance(data, dict):
            raise ValidationError({"template_data": "template_data must be an object"})
        missing = [s for s in self.REQUIRED_SECTIONS if not isinstance(data.get(s), dict)]
        if missing:
            raise ValidationError({"template_data": f"Missing sections: {', '.join(missing)}"})

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self.is_default:
                (
                    ChallanTemplate.objects.filter(template_type=self.template_type, is_default=True)
                    .exclude(pk=self.pk)
                    .update(is_default=False)
                )
            super().save(*args, **kwargs)

    def __str__(self):
        flag = " (default)" if self.is_default else ""
        return f"{self.name}{flag}"
