# core/models.py

from django.db import models

PLAYER_SETTINGS_KEY = "player_settings"

DEFAULT_PLAYER_SETTINGS = {
    "rtspUrl": "rtsp://wowzaec2demo.streamlock.net/vod/mp4:BigBuckBunny_115k.mp4",
    "volume": 0.5,
    "autoplay": False,
    "quality": "auto",
    "bufferSize": 5,
    "reconnectAttempts": 3,
}


class CoreSettings(models.Model):
    key = models.CharField(
        max_length=255,
        unique=True,
    )
    name = models.CharField(
        max_length=255,
    )
    value = models.JSONField(
        default=dict,
        blank=True,
    )

    def __str__(self):
        return "Core Settings"

    # Helper methods to get/set grouped settings
    @classmethod
    def _get_group(cls, key, defaults=None):
        """Get a settings group, returning defaults if not found."""
        try:
            return cls.objects.get(key=key).value or (defaults or {})
        except cls.DoesNotExist:
            return defaults or {}

    @classmethod
    def _update_group(cls, key, name, updates):
        """Update specific fields in a settings group."""
        obj, created = cls.objects.get_or_create(
            key=key,
            defaults={"name": name, "value": {}}
        )
        current = obj.value if isinstance(obj.value, dict) else {}
        current.update(updates)
        obj.value = current
        obj.save()
        return current

    # Player Settings
    @classmethod
    def get_player_settings(cls):
        """Get the player settings document with defaults filled in."""
        stored = cls._get_group(PLAYER_SETTINGS_KEY)
        return {**DEFAULT_PLAYER_SETTINGS, **(stored if isinstance(stored, dict) else {})}

    @classmethod
    def update_player_settings(cls, updates):
        """Shallow-merge `updates` into the player settings document."""
        cls._update_group(PLAYER_SETTINGS_KEY, "Player Settings", updates)
        return cls.get_player_settings()
