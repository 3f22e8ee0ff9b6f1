"""Tests for app-level endpoints (health, root banner)."""

import unittest
from datetime import datetime

from fastapi.testclient import TestClient

from api.main import API_PREFIX, VERSION, app


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_health_returns_message_and_timestamp(self):
        response = self.client.get(f"{API_PREFIX}/health")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["message"], "Portfolio API is running!")
        self.assertTrue(data["timestamp"].endswith("Z"))
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))

    def test_root_lists_endpoints(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["version"], VERSION)
        self.assertEqual(data["endpoints"]["auth"]["login"], "POST /api/auth/login")


if __name__ == '__main__':
    unittest.main()
