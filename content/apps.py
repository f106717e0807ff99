# content/apps.py

"""
CONTENT APP CONFIG

Runtime-editable storefront content:
- site settings + countdown
- homepage sections
- payment configuration (gateway keys, bank details)
- challan/quotation templates
- customer feedback
- notification dismissals
"""

from django.apps import AppConfig


class ContentConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "content"
    verbose_name = "Site Content"
