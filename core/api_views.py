# core/api_views.py

import logging

from django.utils import timezone
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import CoreSettings
from .serializers import PlayerSettingsSerializer

logger = logging.getLogger(__name__)


class PlayerSettingsView(APIView):
    """
    API endpoint for the player settings document.
    This is treated as a singleton: there is exactly one document.
    """

    def get(self, request):
        try:
            return Response(CoreSettings.get_player_settings())
        except Exception as e:
            logger.error(f"Failed to retrieve settings: {e}", exc_info=True)
            return Response({"error": "Failed to retrieve settings"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @swagger_auto_schema(request_body=PlayerSettingsSerializer, responses={200: PlayerSettingsSerializer})
    def put(self, request):
        serializer = PlayerSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            updated = CoreSettings.update_player_settings(serializer.validated_data)
        except Exception as e:
            logger.error(f"Failed to update settings: {e}", exc_info=True)
            return Response({"error": "Failed to update settings"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"Player settings updated: {sorted(serializer.validated_data)}")
        return Response(updated)

    def patch(self, request):
        return self.put(request)


@swagger_auto_schema(
    method="get",
    operation_description="Liveness check",
    responses={200: "Service is up"},
)
@api_view(["GET"])
def health(request):
    from version import __version__

    return Response(
        {
            "status": "ok",
            "timestamp": timezone.now().isoformat(),
            "version": __version__,
        }
    )
