# content/admin.py

from django.contrib import admin

from content.models import (
    ChallanTemplate,
    Feedback,
    HomepageContent,
    NotificationDismissal,
    PaymentSetting,
    SiteSetting,
)


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "description", "updated_at")
    search_fields = ("key",)


@admin.register(HomepageContent)
class HomepageContentAdmin(admin.ModelAdmin):
    list_display = ("section_name", "is_active", "updated_at")


@admin.register(PaymentSetting)
class PaymentSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "updated_at")
    search_fields = ("key",)


@admin.register(ChallanTemplate)
class ChallanTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "template_type", "is_default", "updated_at")
    list_filter = ("template_type", "is_default")


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ("name", "rating", "verified", "created_at")
    list_filter = ("verified", "rating")
    list_editable = ("verified",)


@admin.register(NotificationDismissal)
class NotificationDismissalAdmin(admin.ModelAdmin):
    list_display = ("notification_key", "user", "client_id", "dismissed_at")
    list_filter = ("notification_key",)
