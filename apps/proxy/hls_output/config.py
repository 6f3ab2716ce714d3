"""
HLS Output Configuration Constants
"""

from django.conf import settings


class HLSConfig:
    """Configuration constants for HLS Output system"""

    # Transcoding tool
    FFMPEG_PATH = 'ffmpeg'
    VIDEO_CODEC = 'libx264'
    AUDIO_CODEC = 'aac'

    # Segment settings
    SEGMENT_DURATION = 2  # seconds
    PLAYLIST_SIZE = 5  # number of segments in the sliding window
    HLS_FLAGS = 'delete_segments+append_list'
    ALLOW_CACHE = 0

    # Segment directory layout
    DEFAULT_STORAGE_PATH = '/var/www/hls'
    PLAYLIST_NAME = 'stream.m3u8'
    SEGMENT_PATTERN = 'segment%03d.ts'
    ARTIFACT_EXTENSIONS = ('.m3u8', '.ts')

    # Lifecycle timings
    START_GRACE_PERIOD = 3  # seconds between spawn and reporting running
    PROBE_TIMEOUT = 5  # seconds allowed for `ffmpeg -version`

    # Absolute base for playlist URLs; request host when empty
    PUBLIC_BASE_URL = ''


_SETTING_DEFAULTS = {
    "ffmpeg_path": HLSConfig.FFMPEG_PATH,
    "hls_segment_path": HLSConfig.DEFAULT_STORAGE_PATH,
    "hls_segment_time": HLSConfig.SEGMENT_DURATION,
    "hls_list_size": HLSConfig.PLAYLIST_SIZE,
    "hls_flags": HLSConfig.HLS_FLAGS,
    "start_grace_period": HLSConfig.START_GRACE_PERIOD,
    "probe_timeout": HLSConfig.PROBE_TIMEOUT,
    "public_base_url": HLSConfig.PUBLIC_BASE_URL,
}


def get_hls_setting(name):
    """
    Return an HLS output setting, preferring the project's HLS_OUTPUT dict
    over the built-in defaults.
    """
    if name not in _SETTING_DEFAULTS:
        raise KeyError(f"Unknown HLS output setting: {name}")
    overrides = getattr(settings, "HLS_OUTPUT", None) or {}
    return overrides.get(name, _SETTING_DEFAULTS[name])
