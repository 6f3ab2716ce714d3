from django.urls import path
from .api_views import stream_start, stream_stop, stream_status

app_name = "hls_output_api"

urlpatterns = [
    path('start/', stream_start, name='stream-start'),
    path('stop/', stream_stop, name='stream-stop'),
    path('status/', stream_status, name='stream-status'),
]
