# content/urls.py

"""
CONTENT URLS (admin console) under /api/content/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from content.views import (
    ChallanTemplateViewSet,
    FeedbackAdminViewSet,
    HomepageContentViewSet,
    MediaUploadView,
    PaymentSettingsView,
    SiteSettingViewSet,
)

router = DefaultRouter()

router.register(r"settings", SiteSettingViewSet, basename="site-settings")
router.register(r"homepage", HomepageContentViewSet, basename="homepage")
router.register(r"challan-templates", ChallanTemplateViewSet, basename="challan-templates")
router.register(r"feedback", FeedbackAdminViewSet, basename="feedback")

urlpatterns = [
    path("payment-settings/", PaymentSettingsView.as_view(), name="payment-settings"),
    path("upload/", MediaUploadView.as_view(), name="media-upload"),
    path("", include(router.urls)),
]
