"""shopgen settings.

Typed configuration for generation and the remote model backends.  All
settings use Pydantic v2 models so they can be validated at construction time
and serialised to/from JSON or environment variables without boiler-plate.
Credentials, base URLs and model ids are opaque strings: they are passed
through to the backends unmodified.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

LOCAL_PROVIDER = "local"


class ProviderSettings(BaseModel):
    """Connection details for one remote model backend."""

    name: str = Field(..., description="Display name used in messages")
    base_url: str = Field(..., description="Root URL of the backend API")
    api_key: Optional[str] = Field(default=None, description="Bearer credential, if required")
    default_model: str = Field(..., description="Model id sent with each request")
    models: list[str] = Field(default_factory=list, description="Models offered to users")


def _default_openai() -> ProviderSettings:
    return ProviderSettings(
        name="OpenAI",
        base_url="https://api.openai.com/v1",
        default_model="gpt-4",
        models=["gpt-4", "gpt-3.5-turbo"],
    )


def _default_ollama() -> ProviderSettings:
    return ProviderSettings(
        name="Ollama",
        base_url="http://localhost:11434",
        default_model="mistral",
        models=["mistral", "llama2", "codellama", "neural-chat"],
    )


def _default_mistral() -> ProviderSettings:
    return ProviderSettings(
        name="Mistral AI",
        base_url="https://api.mistral.ai/v1",
        default_model="mistral-medium-latest",
        models=["mistral-large-latest", "mistral-medium-latest", "mistral-small-latest"],
    )


class Settings(BaseModel):
    """Global shopgen configuration.

    Instances are typically created once by the CLI or the web app factory
    and then passed to ``GenerationService``.
    """

    # "local" assembles from templates; anything else names a remote provider.
    provider: str = Field(default=LOCAL_PROVIDER)
    generation_delay: float = Field(
        default=2.0, ge=0.0, description="Artificial latency before a result is returned, in seconds"
    )
    request_timeout: int = Field(default=120, ge=1, description="Per-request backend timeout in seconds")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4000, ge=1)
    cache_ttl: float = Field(default=3600.0, gt=0.0, description="Docs cache entry lifetime in seconds")
    openai: ProviderSettings = Field(default_factory=_default_openai)
    ollama: ProviderSettings = Field(default_factory=_default_ollama)
    mistral: ProviderSettings = Field(default_factory=_default_mistral)

    @property
    def is_local(self) -> bool:
        """Whether generation runs through the local template assembler."""
        return self.provider == LOCAL_PROVIDER

    def provider_settings(self, provider_id: str) -> ProviderSettings:
        """Return the settings block for *provider_id*.

        Raises:
            KeyError: If no block exists for that id.
        """
        blocks = {"openai": self.openai, "ollama": self.ollama, "mistral": self.mistral}
        return blocks[provider_id]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            SHOPGEN_PROVIDER, SHOPGEN_GENERATION_DELAY, SHOPGEN_REQUEST_TIMEOUT,
            SHOPGEN_CACHE_TTL,
            OPENAI_API_KEY, OPENAI_BASE_URL, OPENAI_MODEL,
            OLLAMA_BASE_URL, OLLAMA_MODEL,
            MISTRAL_API_KEY, MISTRAL_BASE_URL, MISTRAL_MODEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SHOPGEN_PROVIDER"):
            kwargs["provider"] = os.environ["SHOPGEN_PROVIDER"].strip().lower()
        if os.environ.get("SHOPGEN_GENERATION_DELAY"):
            kwargs["generation_delay"] = float(os.environ["SHOPGEN_GENERATION_DELAY"])
        if os.environ.get("SHOPGEN_REQUEST_TIMEOUT"):
            kwargs["request_timeout"] = int(os.environ["SHOPGEN_REQUEST_TIMEOUT"])
        if os.environ.get("SHOPGEN_CACHE_TTL"):
            kwargs["cache_ttl"] = float(os.environ["SHOPGEN_CACHE_TTL"])

        kwargs["openai"] = _provider_from_env(_default_openai(), "OPENAI", with_key=True)
        kwargs["ollama"] = _provider_from_env(_default_ollama(), "OLLAMA", with_key=False)
        kwargs["mistral"] = _provider_from_env(_default_mistral(), "MISTRAL", with_key=True)
        return cls(**kwargs)


def _provider_from_env(base: ProviderSettings, prefix: str, *, with_key: bool) -> ProviderSettings:
    updates: dict[str, Any] = {}
    if os.environ.get(f"{prefix}_BASE_URL"):
        updates["base_url"] = os.environ[f"{prefix}_BASE_URL"]
    if os.environ.get(f"{prefix}_MODEL"):
        updates["default_model"] = os.environ[f"{prefix}_MODEL"]
    if with_key and os.environ.get(f"{prefix}_API_KEY"):
        updates["api_key"] = os.environ[f"{prefix}_API_KEY"]
    return base.model_copy(update=updates)
