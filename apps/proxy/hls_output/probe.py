"""
FFmpeg availability probe

Runs once per process at startup to decide whether this environment can
execute the transcoding tool at all.
"""

import logging
import subprocess
import threading

from .config import get_hls_setting

logger = logging.getLogger(__name__)


def probe_ffmpeg(ffmpeg_path=None, timeout=None) -> bool:
    """
    Run `ffmpeg -version` and report whether it printed something and exited
    cleanly within `timeout` seconds.
    """
    ffmpeg_path = ffmpeg_path or get_hls_setting("ffmpeg_path")
    timeout = timeout if timeout is not None else get_hls_setting("probe_timeout")

    try:
        result = subprocess.run(
            [ffmpeg_path, "-version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"FFmpeg probe timed out after {timeout}s ({ffmpeg_path})")
        return False
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"FFmpeg probe could not run {ffmpeg_path}: {e}")
        return False

    output = (result.stdout or "") + (result.stderr or "")
    has_output = any(line.strip() for line in output.splitlines())

    if result.returncode != 0:
        logger.warning(f"FFmpeg probe exited with code {result.returncode}")
        return False
    if not has_output:
        logger.warning("FFmpeg probe exited cleanly but printed nothing")
        return False

    logger.debug(f"FFmpeg probe output: {output.splitlines()[0]}")
    return True


def start_background_probe(manager, ffmpeg_path=None, timeout=None):
    """Probe on a daemon thread and hand the result to the manager."""

    def _run():
        try:
            available = probe_ffmpeg(ffmpeg_path, timeout)
        except Exception as e:
            logger.error(f"FFmpeg probe crashed: {e}", exc_info=True)
            available = False
        manager.set_capability(available)
        if available:
            logger.info("FFmpeg is available")
        else:
            logger.warning("FFmpeg is NOT available; stream conversion will run in demo mode")

    thread = threading.Thread(target=_run, daemon=True, name="FFmpegProbe")
    thread.start()
    return thread
