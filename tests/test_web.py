"""Tests for the Flask HTTP surface (shopgen.web)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from conftest import ScriptedProvider, make_async_client
from shopgen.config import Settings
from shopgen.errors import BackendHTTPError
from shopgen.service import GenerationService
from shopgen.web import create_app

pytestmark = pytest.mark.unit


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()


def _client_for(provider: ScriptedProvider):
    service = GenerationService(Settings(generation_delay=0), provider=provider)
    app = create_app(service=service)
    app.config["TESTING"] = True
    return app.test_client()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}


class TestGenerateEndpoint:
    def test_local_success(self, client, inventory_payload):
        response = client.post("/api/generate", json=inventory_payload)
        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["source"] == "local"
        assert set(body["files"]) == {"package.json", "README.md", ".env.example", "index.js"}

    def test_invalid_payload(self, client, inventory_payload):
        inventory_payload["appType"] = "Mobile App"
        response = client.post("/api/generate", json=inventory_payload)
        assert response.status_code == 400
        body = response.get_json()
        assert body["success"] is False
        assert body["kind"] == "ConfigurationValidationError"
        assert "appType" in body["error"]

    @pytest.mark.parametrize("data", ["not json", "[1, 2]"])
    def test_body_not_an_object(self, client, data):
        response = client.post("/api/generate", data=data, content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["success"] is False

    def test_remote_success(self, scripted_provider, inventory_payload):
        response = _client_for(scripted_provider).post("/api/generate", json=inventory_payload)
        assert response.status_code == 200
        assert response.get_json()["source"] == "scripted"

    def test_backend_failure_is_bad_gateway(self, inventory_payload):
        provider = ScriptedProvider(error=BackendHTTPError("Mistral AI", 503, "Service Unavailable"))
        response = _client_for(provider).post("/api/generate", json=inventory_payload)
        assert response.status_code == 502
        assert response.get_json() == {
            "success": False,
            "error": "Mistral AI API error: Service Unavailable",
            "kind": "BackendHTTPError",
        }

    def test_dropped_connection_is_bad_gateway(self, inventory_payload):
        app = create_app(Settings(provider="ollama", generation_delay=0))
        mock_client = make_async_client(post_error=httpx.ReadError("connection reset"))
        with patch("httpx.AsyncClient", return_value=mock_client):
            response = app.test_client().post("/api/generate", json=inventory_payload)
        assert response.status_code == 502
        assert response.get_json()["kind"] == "BackendUnavailableError"

    def test_unexpected_crash_is_server_error(self, inventory_payload):
        provider = ScriptedProvider(error=RuntimeError("boom"))
        response = _client_for(provider).post("/api/generate", json=inventory_payload)
        assert response.status_code == 500
        assert response.get_json() == {"success": False, "error": "boom"}


class TestProvidersEndpoint:
    def test_listing(self, client):
        with patch(
            "shopgen.providers.ollama.OllamaProvider.is_available",
            new_callable=AsyncMock,
            return_value=True,
        ):
            response = client.get("/api/providers")
        assert response.status_code == 200
        body = response.get_json()
        assert body["current"] == "local"
        assert [p["id"] for p in body["providers"]] == ["openai", "ollama", "mistral"]
        statuses = {p["id"]: p["status"] for p in body["providers"]}
        assert statuses == {"openai": "unavailable", "ollama": "available", "mistral": "unavailable"}
        assert body["providers"][0]["default_model"] == "gpt-4"

    def test_defaults(self, client):
        assert client.get("/api/defaults").get_json() == {
            "appType": "Admin App",
            "framework": "Node.js",
            "features": ["OAuth", "Polaris"],
        }


class TestDocsEndpoints:
    def test_search(self, client):
        response = client.get("/api/docs/search", query_string={"q": "webhook retries"})
        assert response.status_code == 200
        body = response.get_json()
        assert body["title"] == "Webhooks"
        assert body["relevance"] == 0.88

    def test_search_requires_query(self, client):
        assert client.get("/api/docs/search").status_code == 400
        assert client.get("/api/docs/search?q=%20").status_code == 400

    def test_topic(self, client):
        response = client.get("/api/docs/app%20bridge")
        assert response.status_code == 200
        assert response.get_json()["url"] == "https://shopify.dev/app-bridge"

    def test_unknown_topic(self, client):
        response = client.get("/api/docs/payments")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Unknown topic: payments"}
