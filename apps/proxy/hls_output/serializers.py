"""
HLS Output Serializers
"""

from rest_framework import serializers


class StreamStartSerializer(serializers.Serializer):
    """Payload for starting the live stream conversion"""

    sourceAddress = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    # Older front ends post the source under this name
    rtspUrl = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)

    def validate(self, attrs):
        attrs["source_address"] = attrs.get("sourceAddress") or attrs.get("rtspUrl") or ""
        return attrs


class StreamErrorSerializer(serializers.Serializer):
    errorKind = serializers.CharField()
    error = serializers.CharField()
    remediation = serializers.ListField(child=serializers.CharField())
    mode = serializers.CharField()


class StreamStatusSerializer(serializers.Serializer):
    isRunning = serializers.BooleanField()
    state = serializers.CharField()
    hlsAvailable = serializers.BooleanField()
    hlsUrl = serializers.CharField(allow_null=True)
    sourceAddress = serializers.CharField(allow_null=True)
    startedAt = serializers.DateTimeField(allow_null=True)
    hasCapability = serializers.BooleanField()
    mode = serializers.CharField()
    pid = serializers.IntegerField(allow_null=True)
    lastError = serializers.DictField(allow_null=True)
    ffmpegStats = serializers.DictField(allow_null=True)
