from django.apps import AppConfig
import logging

# TRACE (5) sits below DEBUG (10)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'Livecast Core'

    def ready(self):
        from version import __version__

        logging.getLogger(__name__).info(f"Livecast {__version__} starting")
