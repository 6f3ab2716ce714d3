import logging

from django.urls import reverse
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .config import HLSConfig, get_hls_setting
from .exceptions import HLSOutputError, InvalidSourceAddress
from .manager import HLSOutputManager
from .serializers import StreamErrorSerializer, StreamStartSerializer, StreamStatusSerializer

logger = logging.getLogger(__name__)


def build_hls_url(request, filename=HLSConfig.PLAYLIST_NAME):
    path = reverse("hls_output:hls-file", kwargs={"filename": filename})
    base_url = get_hls_setting("public_base_url")
    if base_url:
        return base_url.rstrip("/") + path
    return request.build_absolute_uri(path)


def error_response(exc, manager):
    payload = exc.to_dict()
    payload.setdefault("mode", manager.mode)
    return Response(payload, status=exc.status_code)


@swagger_auto_schema(
    method="post",
    operation_description="Start converting the live source to HLS",
    request_body=StreamStartSerializer,
    responses={
        200: "Playlist URL of the running stream",
        400: StreamErrorSerializer,
        409: StreamErrorSerializer,
        502: StreamErrorSerializer,
        503: StreamErrorSerializer,
    },
)
@api_view(["POST"])
def stream_start(request):
    manager = HLSOutputManager.get_instance()

    serializer = StreamStartSerializer(data=request.data)
    if not serializer.is_valid():
        logger.warning(f"Rejected stream start payload: {serializer.errors}")
        return error_response(InvalidSourceAddress(details=serializer.errors), manager)
    source_address = serializer.validated_data["source_address"]

    logger.info(f"API request to START stream for: {source_address or '<empty>'}")

    try:
        result = manager.start(source_address)
    except HLSOutputError as e:
        logger.warning(f"Stream start failed ({e.error_kind}): {e.message}")
        return error_response(e, manager)
    except Exception as e:
        logger.error(f"Unexpected error starting stream for {source_address}: {e}", exc_info=True)
        return Response(
            {
                "errorKind": "InternalError",
                "error": "Failed to start stream conversion",
                "details": str(e),
                "remediation": ["Check the service log for the full traceback."],
                "mode": manager.mode,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    playlist_url = build_hls_url(request, result.playlist_name)
    return Response(
        {
            "message": "Stream conversion started",
            "playlistUrl": playlist_url,
            "hlsUrl": playlist_url,
            "sourceAddress": result.source_address,
            "startedAt": result.started_at,
            "mode": manager.mode,
        },
        status=status.HTTP_200_OK,
    )


@swagger_auto_schema(
    method="post",
    operation_description="Stop the stream and purge its segments",
    responses={200: "Acknowledgement"},
)
@api_view(["POST"])
def stream_stop(request):
    logger.info("API request to STOP stream")
    HLSOutputManager.get_instance().stop()
    return Response({"message": "Stream stopped", "ack": True}, status=status.HTTP_200_OK)


@swagger_auto_schema(
    method="get",
    operation_description="Current supervisor state plus a fresh playlist existence check",
    responses={200: StreamStatusSerializer},
)
@api_view(["GET"])
def stream_status(request):
    snapshot = HLSOutputManager.get_instance().status()
    hls_available = snapshot["hls_available"]

    return Response(
        {
            "isRunning": snapshot["is_running"],
            "state": snapshot["state"],
            "hlsAvailable": hls_available,
            "hlsUrl": build_hls_url(request) if hls_available else None,
            "sourceAddress": snapshot["source_address"],
            "startedAt": snapshot["started_at"],
            "hasCapability": snapshot["has_capability"],
            "mode": snapshot["mode"],
            "pid": snapshot["pid"],
            "lastError": snapshot["last_error"],
            "ffmpegStats": snapshot["ffmpeg_stats"],
        },
        status=status.HTTP_200_OK,
    )
