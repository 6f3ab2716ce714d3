from unittest.mock import patch

from django.test import SimpleTestCase

from livecast.settings import _log_level


class LogLevelSettingTests(SimpleTestCase):
    def test_trace_maps_to_numeric_level(self):
        with patch.dict("os.environ", {"LIVECAST_FFMPEG_LOG_LEVEL": "trace"}):
            self.assertEqual(_log_level("LIVECAST_FFMPEG_LOG_LEVEL", "INFO"), 5)

    def test_named_level_is_upper_cased(self):
        with patch.dict("os.environ", {"LIVECAST_FFMPEG_LOG_LEVEL": "debug"}):
            self.assertEqual(_log_level("LIVECAST_FFMPEG_LOG_LEVEL", "INFO"), "DEBUG")

    def test_unset_falls_back_to_default(self):
        with patch.dict("os.environ", {}, clear=True):
            self.assertEqual(_log_level("LIVECAST_FFMPEG_LOG_LEVEL", 5), 5)
            self.assertEqual(_log_level("LIVECAST_FFMPEG_LOG_LEVEL", "WARNING"), "WARNING")
