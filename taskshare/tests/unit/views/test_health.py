from unittest.mock import patch

from django.db.utils import OperationalError
from django.test import override_settings
from rest_framework import status
from rest_framework.reverse import reverse
from rest_framework.test import APISimpleTestCase


class HealthViewTests(APISimpleTestCase):
    def test_memory_backend_is_healthy_without_authentication(self):
        response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "UP", "components": {"memory": {"status": "UP"}}})

    @override_settings(STORAGE_BACKEND="postgres")
    @patch("taskshare.views.health.connection")
    def test_database_down_returns_503(self, mock_connection):
        mock_connection.cursor.side_effect = OperationalError("connection refused")

        response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["status"], "DOWN")
        self.assertEqual(response.data["components"]["postgres"]["status"], "DOWN")

    @override_settings(STORAGE_BACKEND="postgres")
    @patch("taskshare.views.health.connection")
    def test_database_up_returns_200(self, mock_connection):
        cursor = mock_connection.cursor.return_value.__enter__.return_value
        cursor.fetchone.return_value = (1,)

        response = self.client.get(reverse("health"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["components"]["postgres"]["status"], "UP")
