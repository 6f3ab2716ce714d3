import logging
import threading

from django.utils import timezone

from .config import get_hls_setting
from .constants import HLSChannelState, StreamMode
from .exceptions import (
    CapabilityUnavailable,
    InvalidSourceAddress,
    ProcessRuntimeFailure,
    ProcessStartFailure,
    StreamPreempted,
)
from .process_handler import FFmpegHLSProcessHandler
from .segment_manager import SegmentManager

logger = logging.getLogger(__name__)

# Upper bound on waiting for a superseded ffmpeg to exit before purging
SUPERSEDE_EXIT_TIMEOUT = 1.0


class StreamJob:
    """The single in-flight transcode. Only HLSOutputManager mutates it."""

    def __init__(self, source_address, handler):
        self.source_address = source_address
        self.handler = handler
        self.state = HLSChannelState.STARTING
        self.started_at = timezone.now()
        self.exit_code = None
        self.failure = None

    def __repr__(self):
        return f"<StreamJob {self.state} {self.source_address}>"


class StartResult:
    def __init__(self, playlist_name, source_address, started_at, pid):
        self.playlist_name = playlist_name
        self.source_address = source_address
        self.started_at = started_at
        self.pid = pid


class HLSOutputManager:
    """
    Supervises the one ffmpeg process that republishes the live source as HLS.

    All state lives in `self._job` and is only touched under `self._lock`.
    Every path that ends a job goes through `_transition_locked`, which
    detaches the process handler whenever the job leaves an active state.
    """

    _instance = None
    _instance_lock = threading.Lock()

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def __init__(self, storage_path=None, ffmpeg_path=None, grace_period=None, capability=None):
        self.segment_manager = SegmentManager(storage_path or get_hls_setting("hls_segment_path"))
        self.ffmpeg_path = ffmpeg_path or get_hls_setting("ffmpeg_path")
        self.grace_period = grace_period if grace_period is not None else get_hls_setting("start_grace_period")

        self._lock = threading.Lock()
        self._job = None
        self._capability = None
        self._capability_known = threading.Event()

        if capability is not None:
            self.set_capability(capability)

        logger.info(f"Initialized HLSOutputManager (segment dir: {self.segment_manager.storage_path})")

    # ------------------------------------------------------------------
    # Capability flag
    # ------------------------------------------------------------------

    def set_capability(self, available):
        """Record the probe result. Only the first call has any effect."""
        if self._capability_known.is_set():
            logger.warning("FFmpeg capability already recorded; ignoring new probe result")
            return
        self._capability = bool(available)
        self._capability_known.set()

    @property
    def has_capability(self):
        return bool(self._capability)

    @property
    def mode(self):
        return StreamMode.PRODUCTION if self.has_capability else StreamMode.DEMO

    def _check_capability(self):
        if not self._capability_known.is_set():
            # Boot-time probe still running; it is bounded by its own timeout
            self._capability_known.wait(get_hls_setting("probe_timeout") + 1)
        if not self._capability:
            raise CapabilityUnavailable(mode=StreamMode.DEMO)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self, source_address):
        if not source_address or not str(source_address).strip():
            raise InvalidSourceAddress()
        source_address = str(source_address).strip()

        self._check_capability()

        while True:
            with self._lock:
                previous = self._job
                if previous is None:
                    job = self._spawn_locked(source_address)
                    handler = job.handler
                    break
                logger.info(f"Superseding existing stream for {previous.source_address}")
                old_handler = previous.handler
                self._transition_locked(previous, HLSChannelState.IDLE)

            # Bounded wait for the old process, taken outside the lock
            if old_handler is not None and not old_handler.wait_for_exit(SUPERSEDE_EXIT_TIMEOUT):
                logger.warning(f"Previous FFmpeg (PID: {old_handler.pid}) still exiting; starting anyway")

        logger.info(f"Stream starting for {source_address}, waiting {self.grace_period}s before reporting ready")
        # No ready signal exists; give ffmpeg the grace period to fail fast
        handler.wait_for_exit(self.grace_period)

        with self._lock:
            if self._job is not job:
                raise StreamPreempted(sourceAddress=source_address)

            if job.state == HLSChannelState.FAILED or handler.has_exited():
                exit_code = handler.returncode
                if job.state != HLSChannelState.FAILED:
                    self._transition_locked(job, HLSChannelState.FAILED, exit_code=exit_code, failure=ProcessStartFailure)
                raise ProcessStartFailure(
                    f"FFmpeg exited with code {exit_code}",
                    sourceAddress=source_address,
                    exitCode=exit_code,
                    lastErrorLine=handler.last_error_line,
                )

            self._transition_locked(job, HLSChannelState.RUNNING)
            return StartResult(
                playlist_name=self.segment_manager.playlist_name,
                source_address=job.source_address,
                started_at=job.started_at,
                pid=handler.pid,
            )

    def _spawn_locked(self, source_address):
        """Purge the directory and launch ffmpeg for a new job. Caller holds self._lock."""
        self.segment_manager.purge_all_segments()

        handler = FFmpegHLSProcessHandler(
            source_address,
            self.segment_manager,
            ffmpeg_path=self.ffmpeg_path,
            on_exit=self._handle_process_exit,
        )
        try:
            handler.start()
        except OSError as e:
            logger.error(f"Failed to spawn FFmpeg for {source_address}: {e}")
            raise ProcessStartFailure(
                f"Failed to start stream conversion: {e}",
                sourceAddress=source_address,
                exitCode=None,
            ) from e

        job = StreamJob(source_address, handler)
        self._job = job
        return job

    def stop(self):
        """Terminate any live process and purge the segment directory. Idempotent."""
        with self._lock:
            job = self._job
            if job is not None:
                logger.info(f"Stopping stream for {job.source_address} (state: {job.state})")
                self._transition_locked(job, HLSChannelState.STOPPING)
            self.segment_manager.purge_all_segments()
            if job is not None:
                self._transition_locked(job, HLSChannelState.IDLE)

    def status(self):
        with self._lock:
            job = self._job
            data = {
                "state": job.state if job else HLSChannelState.IDLE,
                "is_running": job is not None and job.state in HLSChannelState.ACTIVE,
                "source_address": job.source_address if job else None,
                "started_at": job.started_at if job else None,
                "pid": job.handler.pid if job and job.handler else None,
                "ffmpeg_stats": job.handler.get_ffmpeg_stats() if job and job.handler else None,
                "last_error": self._describe_failure(job),
                "has_capability": self.has_capability,
                "mode": self.mode,
            }
        # Read outside the lock; may disagree with `is_running` for a moment
        data["hls_available"] = self.segment_manager.playlist_exists()
        return data

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _transition_locked(self, job, state, exit_code=None, failure=None):
        """Move `job` to `state`. Caller holds self._lock."""
        previous = job.state
        job.state = state

        if state not in HLSChannelState.ACTIVE and job.handler is not None:
            handler, job.handler = job.handler, None
            handler.terminate()

        if state == HLSChannelState.FAILED:
            job.exit_code = exit_code
            job.failure = failure

        if state == HLSChannelState.IDLE and self._job is job:
            self._job = None

        logger.info(f"Stream state {previous} -> {state} ({job.source_address})")

    def _handle_process_exit(self, handler, returncode):
        """Called from the handler's waiter thread once ffmpeg is reaped."""
        with self._lock:
            job = self._job
            if job is None or job.handler is not handler:
                # Released by stop/start already. A dying ffmpeg may flush a
                # final playlist after the purge, so purge again if nothing
                # newer owns the directory.
                if job is None and handler.terminate_requested:
                    self.segment_manager.purge_all_segments()
                return

            if job.state == HLSChannelState.STARTING:
                logger.warning(f"FFmpeg exited with code {returncode} during startup for {job.source_address}")
                self._transition_locked(job, HLSChannelState.FAILED, exit_code=returncode, failure=ProcessStartFailure)
            elif returncode == 0:
                logger.info(f"FFmpeg reached end of stream for {job.source_address}")
                self._transition_locked(job, HLSChannelState.IDLE)
            else:
                logger.error(f"FFmpeg exited with code {returncode} while streaming {job.source_address}")
                self._transition_locked(job, HLSChannelState.FAILED, exit_code=returncode, failure=ProcessRuntimeFailure)

    @staticmethod
    def _describe_failure(job):
        if job is None or job.state != HLSChannelState.FAILED or job.failure is None:
            return None
        return job.failure(f"FFmpeg exited with code {job.exit_code}", exitCode=job.exit_code).to_dict()
