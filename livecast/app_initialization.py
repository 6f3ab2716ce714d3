"""Utilities for deciding which processes run startup work."""

import sys
import os
import logging

logger = logging.getLogger(__name__)


def _is_test_run():
    """Check if Django was loaded by a test runner."""
    if 'pytest' in sys.modules:
        return True
    return 'test' in sys.argv[1:2]


def should_skip_initialization():
    """
    Determine if per-process startup work (the ffmpeg probe) should be skipped.

    Returns True if:
    - A management command that never serves requests is being run
    - The test runner loaded the project (tests inject their own capability)
    - LIVECAST_SKIP_STARTUP_PROBE is set

    Every serving process, including each gunicorn/uwsgi worker, probes on its
    own since the capability flag is process-wide.
    """
    skip_commands = [
        'migrate', 'makemigrations', 'shell', 'dbshell',
        'collectstatic', 'loaddata', 'check', 'showmigrations',
    ]
    if any(cmd in sys.argv for cmd in skip_commands):
        logger.debug(f"Skipping initialization due to command: {sys.argv}")
        return True

    if _is_test_run():
        logger.debug("Skipping initialization under the test runner")
        return True

    if os.environ.get("LIVECAST_SKIP_STARTUP_PROBE"):
        logger.debug("Skipping initialization: LIVECAST_SKIP_STARTUP_PROBE is set")
        return True

    return False
