"""Remote generation providers and their registry.

Quick usage::

    from shopgen.config import Settings
    from shopgen.providers import get_provider

    provider = get_provider("ollama", Settings())
    text = await provider.generate("Write a Shopify app")
"""

from __future__ import annotations

from shopgen.config import Settings
from shopgen.errors import UnknownProviderError
from shopgen.providers.base import AVAILABLE, UNAVAILABLE, LLMProvider
from shopgen.providers.chat import ChatCompletionsProvider, MistralProvider, OpenAIProvider
from shopgen.providers.ollama import OllamaProvider

PROVIDERS: dict[str, type[LLMProvider]] = {
    OpenAIProvider.provider_id: OpenAIProvider,
    OllamaProvider.provider_id: OllamaProvider,
    MistralProvider.provider_id: MistralProvider,
}


def available_providers() -> list[str]:
    """Ids of every registered provider, in registration order."""
    return list(PROVIDERS)


def get_provider(provider_id: str, settings: Settings) -> LLMProvider:
    """Instantiate the provider registered under *provider_id*.

    Raises:
        UnknownProviderError: If the id is not registered.
    """
    provider_cls = PROVIDERS.get(provider_id)
    if provider_cls is None:
        raise UnknownProviderError(provider_id)
    return provider_cls(
        settings.provider_settings(provider_id),
        timeout=settings.request_timeout,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )


__all__ = [
    "AVAILABLE",
    "ChatCompletionsProvider",
    "LLMProvider",
    "MistralProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "PROVIDERS",
    "UNAVAILABLE",
    "available_providers",
    "get_provider",
]
