from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from core.models import DEFAULT_PLAYER_SETTINGS, PLAYER_SETTINGS_KEY, CoreSettings


class PlayerSettingsAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = "/api/settings/"

    def test_get_returns_defaults_when_nothing_stored(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), DEFAULT_PLAYER_SETTINGS)
        self.assertFalse(CoreSettings.objects.filter(key=PLAYER_SETTINGS_KEY).exists())

    def test_put_merges_into_defaults(self):
        """Only the sent keys change; the rest keep their defaults."""
        response = self.client.put(self.url, {"volume": 0.8, "autoplay": True}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["volume"], 0.8)
        self.assertTrue(body["autoplay"])
        self.assertEqual(body["quality"], DEFAULT_PLAYER_SETTINGS["quality"])

        self.assertEqual(self.client.get(self.url).json(), body)

    def test_successive_updates_accumulate(self):
        self.client.put(self.url, {"rtspUrl": "rtsp://camera.local/stream"}, format="json")
        self.client.patch(self.url, {"bufferSize": 10}, format="json")

        body = self.client.get(self.url).json()
        self.assertEqual(body["rtspUrl"], "rtsp://camera.local/stream")
        self.assertEqual(body["bufferSize"], 10)

    def test_unknown_keys_are_kept(self):
        response = self.client.put(self.url, {"theme": "dark"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(self.url).json()["theme"], "dark")

    def test_invalid_values_are_rejected(self):
        for payload in ({"volume": 1.5}, {"volume": -0.1}, {"bufferSize": -1}, {"autoplay": "maybe"}):
            response = self.client.put(self.url, payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, payload)

        self.assertEqual(self.client.get(self.url).json(), DEFAULT_PLAYER_SETTINGS)

    def test_non_object_body_is_rejected(self):
        response = self.client.put(self.url, ["volume", 1], format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class HealthAPITests(TestCase):
    def test_health_reports_ok(self):
        from version import __version__

        response = APIClient().get("/api/health/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["version"], __version__)
        self.assertIn("timestamp", body)
