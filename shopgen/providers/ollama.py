"""Provider for a local Ollama server.

Wraps ``/api/generate`` for text generation and ``/api/tags`` for the
availability check.  Ollama needs no credential.
"""

from __future__ import annotations

from typing import Any

import httpx

from shopgen.errors import MalformedResponseError

from .base import LLMProvider


class OllamaProvider(LLMProvider):
    """Non-streaming client for the Ollama REST API."""

    provider_id = "ollama"

    def build_payload(self, prompt: str, system: str = "") -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }
        if system:
            payload["system"] = system
        return payload

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        """Ollama's non-streaming response puts the full text in ``"response"``."""
        text = data.get("response")
        if not isinstance(text, str):
            raise MalformedResponseError()
        return text

    async def generate(self, prompt: str, system: str = "") -> str:
        data = await self._post_json("/api/generate", self.build_payload(prompt, system))
        return self._extract_text(data)

    async def is_available(self) -> bool:
        """Return ``True`` if the Ollama server responds to ``/api/tags``."""
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                return response.status_code == 200
        except (httpx.HTTPError, httpx.InvalidURL):
            return False

    async def list_models(self) -> list[str]:
        """Names of the models pulled on the server; empty if unreachable."""
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError):
            return []
        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return sorted(m["name"] for m in models if isinstance(m, dict) and m.get("name"))
