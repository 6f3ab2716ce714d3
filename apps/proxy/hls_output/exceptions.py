"""
HLS Output Errors

Failure taxonomy surfaced by the transcode supervisor. Each error carries the
HTTP status the boundary API answers with and operator-facing remediation
hints.
"""

from rest_framework import status


class HLSOutputError(Exception):
    error_kind = "HLSOutputError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "HLS output failed"
    remediation = ()

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        payload = {
            "errorKind": self.error_kind,
            "error": self.message,
            "remediation": list(self.remediation),
        }
        payload.update(self.details)
        return payload


class InvalidSourceAddress(HLSOutputError):
    error_kind = "InvalidSourceAddress"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "A source address is required"
    remediation = (
        "Send a non-empty sourceAddress, e.g. rtsp://camera.local:554/stream.",
    )


class CapabilityUnavailable(HLSOutputError):
    """The environment cannot execute ffmpeg at all."""

    error_kind = "CapabilityUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "FFmpeg not available"
    remediation = (
        "Install ffmpeg on the host or container image and make sure it is on PATH.",
        "Set LIVECAST_FFMPEG_PATH if ffmpeg lives outside PATH.",
        "Restart the service after fixing the environment; availability is only checked at startup.",
    )


class ProcessStartFailure(HLSOutputError):
    """ffmpeg ran but exited before the start grace period elapsed."""

    error_kind = "ProcessStartFailure"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Failed to start stream conversion"
    remediation = (
        "Check that the source address is spelled correctly and includes credentials if required.",
        "Verify the source host is reachable from this server (network, firewall, VPN).",
        "Inspect the service log for the ffmpeg diagnostic lines before retrying.",
    )


class ProcessRuntimeFailure(HLSOutputError):
    """ffmpeg exited nonzero after the stream was reported running."""

    error_kind = "ProcessRuntimeFailure"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Stream conversion stopped unexpectedly"
    remediation = (
        "The upstream source dropped or the network failed; start the stream again.",
        "Retry with backoff if the source is known to be flaky.",
    )


class StreamPreempted(HLSOutputError):
    """The start was superseded by a newer start or cancelled by a stop."""

    error_kind = "StreamPreempted"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Stream start was superseded before it became ready"
    remediation = (
        "Another start or stop request arrived during startup; check the stream status.",
    )


class FilesystemCleanupFailure(HLSOutputError):
    """Never surfaced to callers; logged by the segment directory."""

    error_kind = "FilesystemCleanupFailure"
    default_message = "Failed to remove HLS artifacts"
