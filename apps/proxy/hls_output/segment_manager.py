"""
HLS Segment Manager

Manages the public segment directory ffmpeg writes into.
"""

import os
import logging

from .config import HLSConfig
from .exceptions import FilesystemCleanupFailure

logger = logging.getLogger(__name__)


class SegmentManager:
    """Owns the playlist and segment files of the live stream"""

    def __init__(self, storage_path: str,
                 playlist_name: str = HLSConfig.PLAYLIST_NAME,
                 segment_pattern: str = HLSConfig.SEGMENT_PATTERN):
        self.storage_path = storage_path
        self.playlist_name = playlist_name
        self.segment_pattern = segment_pattern

    def get_storage_path(self) -> str:
        """Get storage path for segments, creating it if needed"""
        os.makedirs(self.storage_path, exist_ok=True)
        return self.storage_path

    @property
    def playlist_path(self) -> str:
        return os.path.join(self.storage_path, self.playlist_name)

    @property
    def segment_path_pattern(self) -> str:
        return os.path.join(self.storage_path, self.segment_pattern)

    def playlist_exists(self) -> bool:
        return os.path.isfile(self.playlist_path)

    def resolve(self, filename: str):
        """
        Map a public file name to a path inside the directory.

        Returns None for names that are not HLS artifacts or that try to
        escape the directory.
        """
        if not filename or os.path.basename(filename) != filename:
            return None
        if not filename.endswith(HLSConfig.ARTIFACT_EXTENSIONS):
            return None
        return os.path.join(self.storage_path, filename)

    def list_artifacts(self):
        try:
            names = os.listdir(self.storage_path)
        except FileNotFoundError:
            return []
        return sorted(n for n in names if n.endswith(HLSConfig.ARTIFACT_EXTENSIONS))

    def list_segments(self):
        return [n for n in self.list_artifacts() if n.endswith('.ts')]

    def purge_all_segments(self) -> int:
        """Delete the playlist and every segment. Errors are logged, not raised."""
        deleted_count = 0

        try:
            names = self.list_artifacts()
        except OSError as e:
            logger.error(f"Failed to list HLS directory {self.storage_path}: {e}")
            return 0

        for name in names:
            file_path = os.path.join(self.storage_path, name)
            try:
                if self._remove(file_path):
                    deleted_count += 1
            except FilesystemCleanupFailure as e:
                logger.error(str(e))

        if deleted_count > 0:
            logger.info(f"Purged {deleted_count} HLS files from {self.storage_path}")

        return deleted_count

    def _remove(self, file_path):
        try:
            os.remove(file_path)
            return True
        except FileNotFoundError:
            # ffmpeg already rotated it out
            return False
        except OSError as e:
            raise FilesystemCleanupFailure(f"Failed to delete HLS file {file_path}: {e}") from e
