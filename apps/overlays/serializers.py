from rest_framework import serializers

from .models import Overlay

# Managed by the server; never stored inside the document
RESERVED_KEYS = ("id", "createdAt", "updatedAt")


class OverlaySerializer(serializers.ModelSerializer):
    """
    Flattens the stored document so clients see `{id, ...document, createdAt}`.
    Updates shallow-merge into the existing document.
    """

    class Meta:
        model = Overlay
        fields = ["id", "document", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            raise serializers.ValidationError({"error": "Overlay must be a JSON object"})
        return {"document": {k: v for k, v in data.items() if k not in RESERVED_KEYS}}

    def to_representation(self, instance):
        return {
            **instance.document,
            "id": str(instance.id),
            "createdAt": instance.created_at.isoformat() if instance.created_at else None,
            "updatedAt": instance.updated_at.isoformat() if instance.updated_at else None,
        }

    def update(self, instance, validated_data):
        merged = dict(instance.document or {})
        merged.update(validated_data.get("document", {}))
        instance.document = merged
        instance.save(update_fields=["document", "updated_at"])
        return instance
