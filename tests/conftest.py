"""Shared pytest fixtures for the shopgen test suite.

Provides reusable fixtures for:
- Settings with the artificial delay disabled
- Sample app configurations and form payloads
- A scripted in-process LLM provider
- Mocked ``httpx.AsyncClient`` instances and real ``httpx.Response`` objects
"""

from __future__ import annotations

import json
from typing import Any, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from shopgen.config import ProviderSettings, Settings
from shopgen.models import AppConfiguration
from shopgen.providers.base import LLMProvider


# ---------------------------------------------------------------------------
# Settings & configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    """Local-assembly settings with no artificial delay."""
    return Settings(generation_delay=0.0)


@pytest.fixture
def inventory_payload() -> dict[str, Any]:
    """Form payload for a minimal OAuth-only admin app."""
    return {
        "appType": "Admin App",
        "framework": "Node.js",
        "features": ["OAuth"],
        "description": "Track inventory levels",
    }


@pytest.fixture
def inventory_config(inventory_payload) -> AppConfiguration:
    return AppConfiguration.model_validate(inventory_payload)


@pytest.fixture
def remix_config() -> AppConfiguration:
    return AppConfiguration(
        app_type="Admin App",
        framework="Remix",
        features=["OAuth", "Polaris"],
        description="Track inventory levels",
    )


# ---------------------------------------------------------------------------
# Scripted provider
# ---------------------------------------------------------------------------

class ScriptedProvider(LLMProvider):
    """In-process provider that replays a canned reply or raises an error."""

    provider_id = "scripted"

    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        super().__init__(
            ProviderSettings(name="Scripted", base_url="http://scripted.invalid", default_model="scripted-1")
        )
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, prompt: str, system: str = "") -> str:
        self.calls.append((prompt, system))
        if self.error is not None:
            raise self.error
        return self.reply

    async def is_available(self) -> bool:
        return self.error is None


@pytest.fixture
def files_reply() -> str:
    """Model output with prose around a ``files`` object."""
    body = json.dumps({"files": {"index.js": "app.get('/', (req, res) => { res.send('ok'); });"}})
    return f"Sure! Here is your scaffold:\n{body}\nLet me know if you need more."


@pytest.fixture
def scripted_provider(files_reply) -> ScriptedProvider:
    return ScriptedProvider(reply=files_reply)


# ---------------------------------------------------------------------------
# httpx helpers
# ---------------------------------------------------------------------------

def make_response(status_code: int = 200, json_body: Any = None, text: str | None = None) -> httpx.Response:
    """Build a real ``httpx.Response`` bound to a dummy request."""
    request = httpx.Request("POST", "http://backend.test")
    if text is not None:
        return httpx.Response(status_code, text=text, request=request)
    return httpx.Response(status_code, json=json_body if json_body is not None else {}, request=request)


def make_async_client(
    post_response: httpx.Response | None = None,
    get_response: httpx.Response | None = None,
    post_error: Exception | None = None,
    get_error: Exception | None = None,
) -> AsyncMock:
    """An ``AsyncMock`` standing in for ``httpx.AsyncClient`` as a context manager."""
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(return_value=post_response, side_effect=post_error)
    mock_client.get = AsyncMock(return_value=get_response, side_effect=get_error)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client
