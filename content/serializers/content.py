# content/serializers/content.py

"""
CONTENT SERIALIZERS

- Site settings / homepage sections: plain model serializers + bulk input
- Payment settings: input only (reads go through the masking service)
- Challan templates: template_data sections validated by the model
- Feedback: admin shape + public submit shape (verified is never client-set)
"""

from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from content.models import (
    ChallanTemplate,
    Feedback,
    HomepageContent,
    NotificationDismissal,
    PaymentSetting,
    SiteSetting,
)
from content.services.notifications import KNOWN_NOTIFICATIONS


# =====================================================
# SITE SETTINGS
# =====================================================

class SiteSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteSetting
        fields = ["id", "key", "value", "description", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_key(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("key is required")
        return value

    def validate(self, attrs):
        key = attrs.get("key", getattr(self.instance, "key", ""))
        value = attrs.get("value")
        if key == SiteSetting.KEY_MINIMUM_ORDER and value not in (None, ""):
            _validate_amount(value)
        return attrs


def _validate_amount(value):
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        raise serializers.ValidationError({"value": "minimum_order must be a number"})
    if not amount.is_finite():
        raise serializers.ValidationError({"value": "minimum_order must be a number"})
    if amount < 0:
        raise serializers.ValidationError({"value": "minimum_order must be zero or more"})


class SiteSettingItemSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=100)
    value = serializers.CharField(allow_blank=True, required=False, default="")
    description = serializers.CharField(allow_blank=True, required=False, default="", max_length=255)

    def validate(self, attrs):
        attrs["key"] = attrs["key"].strip()
        if attrs["key"] == SiteSetting.KEY_MINIMUM_ORDER and attrs.get("value"):
            _validate_amount(attrs["value"])
        return attrs


class SiteSettingUpsertSerializer(serializers.Serializer):
    settings = SiteSettingItemSerializer(many=True, allow_empty=False)


# =====================================================
# HOMEPAGE
# =====================================================

class HomepageContentSerializer(serializers.ModelSerializer):
    class Meta:
        model = HomepageContent
        fields = ["id", "section_name", "content", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_content(self, value):
        if not isinstance(value, (dict, list)):
            raise serializers.ValidationError("content must be a JSON object or list")
        return value


# =====================================================
# PAYMENT SETTINGS
# =====================================================

class PaymentSettingItemSerializer(serializers.Serializer):
    key = serializers.ChoiceField(choices=[(k, k) for k in PaymentSetting.KNOWN_KEYS])
    value = serializers.CharField(allow_blank=True, required=False, default="")


class PaymentSettingInputSerializer(serializers.Serializer):
    settings = PaymentSettingItemSerializer(many=True, allow_empty=False)


# =====================================================
# CHALLAN TEMPLATES
# =====================================================

class ChallanTemplateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChallanTemplate
        fields = [
            "id",
            "name",
            "template_type",
            "is_default",
            "template_data",
            "thumbnail_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate(self, attrs):
        probe = ChallanTemplate(
            name=attrs.get("name", getattr(self.instance, "name", "")),
            template_data=attrs.get("template_data", getattr(self.instance, "template_data", {})),
        )
        try:
            probe.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict)
        return attrs


# =====================================================
# FEEDBACK
# =====================================================

class FeedbackSerializer(serializers.ModelSerializer):
    class Meta:
        model = Feedback
        fields = ["id", "name", "rating", "comment", "verified", "created_at"]
        read_only_fields = ["id", "created_at"]


class FeedbackSubmitSerializer(serializers.ModelSerializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)

    class Meta:
        model = Feedback
        fields = ["id", "name", "rating", "comment", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name is required")
        return value

    def validate_comment(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("comment is required")
        return value


# =====================================================
# NOTIFICATIONS
# =====================================================

class NotificationDismissSerializer(serializers.Serializer):
    key = serializers.ChoiceField(
        choices=sorted(KNOWN_NOTIFICATIONS),
        default=NotificationDismissal.KEY_CATEGORY_UPDATES,
    )
    client_id = serializers.CharField(required=False, allow_blank=True, max_length=64)
