import logging

from django.http import Http404
from rest_framework import status, viewsets
from rest_framework.response import Response

from .models import Overlay
from .serializers import OverlaySerializer

logger = logging.getLogger(__name__)

NOT_FOUND = {"error": "Overlay not found"}


class OverlayViewSet(viewsets.ModelViewSet):
    """
    API endpoint that allows overlays to be viewed, created, edited, or deleted.
    """

    queryset = Overlay.objects.all()
    serializer_class = OverlaySerializer
    pagination_class = None

    def handle_exception(self, exc):
        if isinstance(exc, Http404):
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return super().handle_exception(exc)

    def perform_create(self, serializer):
        overlay = serializer.save()
        logger.info(f"Created overlay {overlay.id}")

    def perform_destroy(self, instance):
        logger.info(f"Deleting overlay {instance.id}")
        instance.delete()

    def destroy(self, request, *args, **kwargs):
        self.perform_destroy(self.get_object())
        return Response({"message": "Overlay deleted successfully"}, status=status.HTTP_200_OK)
