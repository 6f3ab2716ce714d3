import os
import shutil
import tempfile
from unittest.mock import patch

from django.test import SimpleTestCase

from apps.proxy.hls_output.exceptions import FilesystemCleanupFailure
from apps.proxy.hls_output.segment_manager import SegmentManager


class SegmentManagerTests(SimpleTestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.storage_path = os.path.join(self.temp_dir, "hls")
        self.segments = SegmentManager(self.storage_path)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _touch(self, name):
        self.segments.get_storage_path()
        with open(os.path.join(self.storage_path, name), "w") as f:
            f.write("x")

    def test_missing_directory_is_empty(self):
        self.assertEqual(self.segments.list_artifacts(), [])
        self.assertFalse(self.segments.playlist_exists())
        self.assertEqual(self.segments.purge_all_segments(), 0)

    def test_purge_removes_only_hls_artifacts(self):
        for name in ("stream.m3u8", "segment000.ts", "segment001.ts", "notes.txt"):
            self._touch(name)

        self.assertEqual(self.segments.purge_all_segments(), 3)
        self.assertEqual(os.listdir(self.storage_path), ["notes.txt"])

    def test_playlist_exists_tracks_file(self):
        self._touch("stream.m3u8")
        self.assertTrue(self.segments.playlist_exists())
        self.segments.purge_all_segments()
        self.assertFalse(self.segments.playlist_exists())

    def test_list_segments(self):
        for name in ("stream.m3u8", "segment001.ts", "segment000.ts"):
            self._touch(name)
        self.assertEqual(self.segments.list_segments(), ["segment000.ts", "segment001.ts"])

    def test_resolve_rejects_traversal_and_foreign_files(self):
        self.assertEqual(self.segments.resolve("segment004.ts"), os.path.join(self.storage_path, "segment004.ts"))
        self.assertEqual(self.segments.resolve("stream.m3u8"), os.path.join(self.storage_path, "stream.m3u8"))
        for name in ("../stream.m3u8", "sub/segment000.ts", "settings.py", "", "stream.m3u8.tmp"):
            self.assertIsNone(self.segments.resolve(name), name)

    def test_delete_error_is_logged_and_purge_continues(self):
        """A file that cannot be removed does not stop the rest of the purge."""
        for name in ("segment000.ts", "segment001.ts"):
            self._touch(name)

        real_remove = os.remove

        def flaky_remove(path):
            if path.endswith("segment000.ts"):
                raise PermissionError("read-only")
            real_remove(path)

        with patch("apps.proxy.hls_output.segment_manager.os.remove", side_effect=flaky_remove):
            with self.assertLogs("apps.proxy.hls_output.segment_manager", level="ERROR"):
                deleted = self.segments.purge_all_segments()

        self.assertEqual(deleted, 1)
        self.assertEqual(self.segments.list_segments(), ["segment000.ts"])

    def test_remove_raises_cleanup_failure(self):
        with patch("apps.proxy.hls_output.segment_manager.os.remove", side_effect=PermissionError("denied")):
            with self.assertRaises(FilesystemCleanupFailure):
                self.segments._remove(os.path.join(self.storage_path, "segment000.ts"))

    def test_remove_of_vanished_file_is_not_an_error(self):
        self.assertFalse(self.segments._remove(os.path.join(self.storage_path, "segment999.ts")))
