from rest_framework.routers import DefaultRouter

from .api_views import OverlayViewSet

app_name = 'overlays'

router = DefaultRouter()
router.register(r'overlays', OverlayViewSet, basename='overlay')

urlpatterns = router.urls
