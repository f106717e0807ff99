# products/serializers/gift_box.py

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from products.models import GiftBox


class GiftBoxSerializer(serializers.ModelSerializer):
    """
    discount and final_rate are derived by the model; clients never set them.
    """

    features = serializers.ListField(
        child=serializers.CharField(allow_blank=True, max_length=200),
        required=False,
    )

    class Meta:
        model = GiftBox
        fields = [
            "id",
            "title",
            "description",
            "price",
            "original_price",
            "discount",
            "final_rate",
            "image_url",
            "features",
            "badge",
            "badge_color",
            "display_order",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "discount", "final_rate", "created_at", "updated_at"]

    def validate(self, attrs):
        price = attrs.get("price", getattr(self.instance, "price", None))
        original = attrs.get("original_price", getattr(self.instance, "original_price", None))
        if price is not None and original is not None and price >= original:
            raise serializers.ValidationError({"price": "Price must be less than original price"})
        return attrs

    def _save_model(self, instance):
        try:
            instance.save()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict if hasattr(exc, "message_dict") else exc.messages)
        return instance

    def create(self, validated_data):
        return self._save_model(GiftBox(**validated_data))

    def update(self, instance, validated_data):
        for k, v in validated_data.items():
            setattr(instance, k, v)
        return self._save_model(instance)
