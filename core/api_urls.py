from django.urls import path

from .api_views import PlayerSettingsView, health

app_name = "core"

urlpatterns = [
    path("settings/", PlayerSettingsView.as_view(), name="player-settings"),
    path("health/", health, name="health"),
]
