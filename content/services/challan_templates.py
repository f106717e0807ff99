# content/services/challan_templates.py

"""
CHALLAN TEMPLATE SERVICE

- Default template data used when no template exists yet
- Resolve the default template per type (creating it on first use)
- Safe accessors that merge a stored template over the defaults, so a
  template missing a key never breaks PDF generation
"""

from __future__ import annotations

import copy

from django.conf import settings

from content.models import ChallanTemplate

DEFAULT_TEMPLATE_DATA = {
    "company_info": {
        "name": "Hello Crackers",
        "address": "",
        "phone": "",
        "email": "",
        "gst_number": "",
    },
    "challan_settings": {
        "prefix": "CH",
        "starting_number": 1001,
        "date_format": "DD/MM/YYYY",
        "auto_increment": True,
    },
    "fields": {
        "show_customer_details": True,
        "show_product_details": True,
        "show_quantities": True,
        "show_rates": True,
        "show_totals": True,
        "custom_fields": [],
    },
    "footer": {
        "terms": [
            "Goods delivered in good condition",
            "This is a computer generated challan",
            "For any queries, contact us at the above number",
        ],
        "signature_line": True,
        "prepared_by": "Sales Team",
    },
}


def default_template_data() -> dict:
    data = copy.deepcopy(DEFAULT_TEMPLATE_DATA)
    data["company_info"]["name"] = getattr(settings, "STORE_NAME", "Hello Crackers")
    return data


def merged_template_data(template: ChallanTemplate | None) -> dict:
    data = default_template_data()
    stored = (template.template_data if template else None) or {}
    for section, values in stored.items():
        if isinstance(values, dict) and isinstance(data.get(section), dict):
            data[section].update(values)
        else:
            data[section] = values
    return data


def get_default_template(template_type: str = ChallanTemplate.TYPE_CHALLAN) -> ChallanTemplate:
    template = ChallanTemplate.objects.filter(template_type=template_type, is_default=True).first()
    if template is not None:
        return template

    template = ChallanTemplate.objects.filter(template_type=template_type).order_by("created_at").first()
    if template is not None:
        template.is_default = True
        template.save(update_fields=["is_default", "updated_at"])
        return template

    label = "Challan" if template_type == ChallanTemplate.TYPE_CHALLAN else "Quotation"
    return ChallanTemplate.objects.create(
        name=f"Default {label} Template",
        template_type=template_type,
        is_default=True,
        template_data=default_template_data(),
    )


def set_default(template: ChallanTemplate) -> ChallanTemplate:
    template.is_default = True
    template.save()
    return template
