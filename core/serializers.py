# core/serializers.py

from rest_framework import serializers

from .models import DEFAULT_PLAYER_SETTINGS


class PlayerSettingsSerializer(serializers.Serializer):
    """
    Validates the known player settings keys. Unknown keys are kept as-is so
    the front end can store extra preferences without a schema change.
    """

    rtspUrl = serializers.CharField(required=False, allow_blank=True)
    volume = serializers.FloatField(required=False, min_value=0.0, max_value=1.0)
    autoplay = serializers.BooleanField(required=False)
    quality = serializers.CharField(required=False, max_length=32)
    bufferSize = serializers.IntegerField(required=False, min_value=0)
    reconnectAttempts = serializers.IntegerField(required=False, min_value=0)

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            raise serializers.ValidationError({"error": "Settings must be a JSON object"})
        validated = super().to_internal_value(data)
        extras = {k: v for k, v in data.items() if k not in self.fields}
        return {**extras, **validated}

    def to_representation(self, instance):
        return {**DEFAULT_PLAYER_SETTINGS, **instance}
