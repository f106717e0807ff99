# content/views/__init__.py

from .admin import (
    ChallanTemplateViewSet,
    FeedbackAdminViewSet,
    HomepageContentViewSet,
    MediaUploadView,
    PaymentSettingsView,
    SiteSettingViewSet,
)

__all__ = [
    "ChallanTemplateViewSet",
    "FeedbackAdminViewSet",
    "HomepageContentViewSet",
    "MediaUploadView",
    "PaymentSettingsView",
    "SiteSettingViewSet",
]
