from django.apps import AppConfig


class OverlaysConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.overlays'
    verbose_name = 'Overlays'
