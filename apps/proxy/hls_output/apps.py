import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class HLSOutputConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.proxy.hls_output'
    label = 'hls_output'
    verbose_name = 'HLS Output'

    def ready(self):
        """Probe for ffmpeg once per process, off the request path"""
        from livecast.app_initialization import should_skip_initialization

        if should_skip_initialization():
            return

        from .manager import HLSOutputManager
        from .probe import start_background_probe

        start_background_probe(HLSOutputManager.get_instance())
