"""Chat-completions providers (OpenAI and Mistral AI).

Both backends speak the same ``POST /chat/completions`` dialect and require
a bearer credential, so they share one implementation.
"""

from __future__ import annotations

from typing import Any

from shopgen.errors import BackendUnavailableError, MalformedResponseError

from .base import LLMProvider


class ChatCompletionsProvider(LLMProvider):
    """Provider for ``/chat/completions`` style APIs."""

    def _require_key(self) -> str:
        if not self.settings.api_key:
            raise BackendUnavailableError(
                self.display_name, f"{self.display_name} API key not found"
            )
        return self.settings.api_key

    def build_payload(self, prompt: str, system: str = "") -> dict[str, Any]:
        """Request body for a single-turn completion."""
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        """Pull ``choices[0].message.content`` out of a completion response."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError() from exc
        if not isinstance(content, str):
            raise MalformedResponseError()
        return content

    async def generate(self, prompt: str, system: str = "") -> str:
        api_key = self._require_key()
        data = await self._post_json(
            "/chat/completions",
            self.build_payload(prompt, system),
            headers={"Authorization": f"Bearer {api_key}"},
        )
        return self._extract_text(data)

    async def is_available(self) -> bool:
        return bool(self.settings.api_key)


class OpenAIProvider(ChatCompletionsProvider):
    provider_id = "openai"


class MistralProvider(ChatCompletionsProvider):
    provider_id = "mistral"
