import logging
import re  # For parsing FFmpeg stats
import subprocess
import threading
import time

from .config import get_hls_setting, HLSConfig


class FFmpegHLSProcessHandler:
    """
    Owns one ffmpeg process writing a sliding-window HLS playlist.

    Output is consumed on two reader threads for logging only. A waiter thread
    reaps the exit code, joins the readers and calls `on_exit(handler, code)`.
    """

    def __init__(self, source_address, segment_manager, ffmpeg_path=None, on_exit=None):
        self.source_address = source_address
        self.segment_manager = segment_manager
        self.ffmpeg_path = ffmpeg_path or get_hls_setting("ffmpeg_path")
        self.on_exit = on_exit

        self.ffmpeg_process = None
        self.returncode = None
        self.started_at = None
        self.terminate_requested = False
        self._exited = threading.Event()
        self._reader_threads = []
        self._waiter_thread = None
        self.current_ffmpeg_stats = {}  # For holding parsed stats
        self.last_error_line = None

        self.logger = logging.getLogger(f"{__name__}.FFmpegHLSProcessHandler")

        # Example: frame=   40 fps= 29 q=26.0 size=      46kB time=00:00:01.22 bitrate= 308.2kbits/s speed=0.865x
        self.ffmpeg_stats_regex = re.compile(
            r"frame=\s*(?P<frame>\d+)\s*"
            r"fps=\s*(?P<fps>[\d\.]+)\s*"
            r"(q=\s*(?P<q>[\d\.-]+)\s*)?"  # q can be N/A or a number
            r"size=\s*(?P<size>\S+)\s*"  # e.g., 1024kB
            r"time=\s*(?P<time>[\d\:\.]+)\s*"
            r"bitrate=\s*(?P<bitrate>\S+)\s*"  # e.g., 1500kbits/s or N/A
            r"(speed=\s*(?P<speed>[\d\.]+x))?"  # speed can be optional
        )
        # Diagnostic patterns worth surfacing at error level
        self.critical_error_patterns = [
            re.compile(r"Input/output error", re.IGNORECASE),
            re.compile(r"Conversion failed!", re.IGNORECASE),
            re.compile(r"No such file or directory", re.IGNORECASE),
            re.compile(r"Connection refused", re.IGNORECASE),
            re.compile(r"Connection timed out", re.IGNORECASE),
            re.compile(r"Name or service not known", re.IGNORECASE),
            re.compile(r"401 Unauthorized", re.IGNORECASE),
        ]

    @property
    def pid(self):
        return self.ffmpeg_process.pid if self.ffmpeg_process else None

    def build_ffmpeg_command(self):
        """Fixed argument template; only the source address varies."""
        return [
            self.ffmpeg_path,
            "-i", self.source_address,
            "-c:v", HLSConfig.VIDEO_CODEC,
            "-c:a", HLSConfig.AUDIO_CODEC,
            "-f", "hls",
            "-hls_time", str(get_hls_setting("hls_segment_time")),
            "-hls_list_size", str(get_hls_setting("hls_list_size")),
            "-hls_flags", get_hls_setting("hls_flags"),
            "-hls_allow_cache", str(HLSConfig.ALLOW_CACHE),
            "-hls_segment_filename", self.segment_manager.segment_path_pattern,
            "-y",
            self.segment_manager.playlist_path,
        ]

    def start(self):
        """
        Spawn ffmpeg. Raises OSError when the binary cannot be executed.
        """
        self.segment_manager.get_storage_path()
        command = self.build_ffmpeg_command()
        self.logger.info(f"Starting FFmpeg with args: {' '.join(command[1:])}")

        self.ffmpeg_process = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            bufsize=1,
        )
        self.started_at = time.time()
        self.logger = logging.getLogger(f"{__name__}.FFmpegHLSProcessHandler.{self.ffmpeg_process.pid}")

        for stream_name, stream in (("stdout", self.ffmpeg_process.stdout), ("stderr", self.ffmpeg_process.stderr)):
            reader = threading.Thread(
                target=self._read_output,
                args=(stream_name, stream),
                daemon=True,
                name=f"FFmpeg{stream_name.capitalize()}-{self.ffmpeg_process.pid}",
            )
            reader.start()
            self._reader_threads.append(reader)

        self._waiter_thread = threading.Thread(
            target=self._wait_for_exit,
            daemon=True,
            name=f"FFmpegWaiter-{self.ffmpeg_process.pid}",
        )
        self._waiter_thread.start()

        self.logger.info(f"FFmpeg process started (PID: {self.ffmpeg_process.pid}) for {self.source_address}")

    def _read_output(self, stream_name, stream):
        try:
            for raw_line in iter(stream.readline, ''):
                # ffmpeg redraws its progress line with carriage returns
                for line in raw_line.replace('\r', '\n').split('\n'):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        self._handle_output_line(stream_name, line)
                    except Exception as e:
                        # Keep draining; a full pipe would stall ffmpeg
                        self.logger.warning(f"Could not handle FFmpeg {stream_name} line {line!r}: {e}")
        except (OSError, ValueError) as e:
            # Pipe closed underneath us during teardown
            self.logger.debug(f"FFmpeg {stream_name} reader stopped: {e}")
        finally:
            try:
                stream.close()
            except OSError:
                pass

    def _handle_output_line(self, stream_name, line):
        self.logger.debug(f"FFmpeg {stream_name}: {line}")

        for pattern in self.critical_error_patterns:
            if pattern.search(line):
                self.logger.error(f"FFmpeg reported: {line}")
                self.last_error_line = line
                break

        match = self.ffmpeg_stats_regex.search(line)
        if match:
            stats = match.groupdict()
            self.current_ffmpeg_stats = {
                "frame": stats.get("frame"),
                "fps": stats.get("fps"),
                "size": stats.get("size"),
                "time_processed": stats.get("time"),
                "bitrate": stats.get("bitrate"),
                "speed": stats["speed"].rstrip('x') if stats.get("speed") else "N/A",
                "updated_at": time.time(),
            }

    def _wait_for_exit(self):
        process = self.ffmpeg_process
        self.returncode = process.wait()
        for reader in self._reader_threads:
            reader.join(timeout=2)
            if reader.is_alive():
                self.logger.warning(f"{reader.name} did not finish after FFmpeg exited; abandoning it")

        self.logger.info(f"FFmpeg process exited with code {self.returncode}")
        self._exited.set()

        if self.on_exit:
            try:
                self.on_exit(self, self.returncode)
            except Exception as e:
                self.logger.error(f"Error handling FFmpeg exit: {e}", exc_info=True)

    def wait_for_exit(self, timeout=None) -> bool:
        """Block until the process has exited and been reaped, or timeout."""
        return self._exited.wait(timeout)

    def has_exited(self) -> bool:
        return self._exited.is_set()

    def is_process_alive(self):
        return self.ffmpeg_process is not None and self.ffmpeg_process.poll() is None

    def terminate(self):
        """Send SIGTERM without waiting for the process to exit."""
        self.terminate_requested = True
        if not self.is_process_alive():
            return
        self.logger.info(f"Terminating FFmpeg process (PID: {self.ffmpeg_process.pid})")
        try:
            self.ffmpeg_process.terminate()
        except ProcessLookupError:
            # Exited between the liveness check and the signal
            pass

    def get_ffmpeg_stats(self):
        stats = dict(self.current_ffmpeg_stats)
        stats["pid"] = self.pid
        stats["last_error_line"] = self.last_error_line
        if self.returncode is not None:
            stats["exit_code"] = self.returncode
        return stats
