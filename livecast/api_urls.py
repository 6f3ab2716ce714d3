from django.urls import include, path

app_name = "api"

urlpatterns = [
    path("stream/", include("apps.proxy.hls_output.api_urls")),
    path("", include("apps.overlays.api_urls")),
    path("", include("core.api_urls")),
]
