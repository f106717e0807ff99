# content/serializers/__init__.py

from .content import (
    ChallanTemplateSerializer,
    FeedbackSerializer,
    FeedbackSubmitSerializer,
    HomepageContentSerializer,
    NotificationDismissSerializer,
    PaymentSettingInputSerializer,
    SiteSettingSerializer,
    SiteSettingUpsertSerializer,
)

__all__ = [
    "ChallanTemplateSerializer",
    "FeedbackSerializer",
    "FeedbackSubmitSerializer",
    "HomepageContentSerializer",
    "NotificationDismissSerializer",
    "PaymentSettingInputSerializer",
    "SiteSettingSerializer",
    "SiteSettingUpsertSerializer",
]
