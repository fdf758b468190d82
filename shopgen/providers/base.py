"""Common base for remote language-model providers.

Each provider exposes one capability -- ``generate(prompt) -> raw text`` --
plus availability checks.  Transport problems are mapped onto the shopgen
error hierarchy here so that every backend fails the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from shopgen.config import ProviderSettings
from shopgen.errors import BackendHTTPError, BackendUnavailableError, MalformedResponseError

AVAILABLE = "available"
UNAVAILABLE = "unavailable"


class LLMProvider(ABC):
    """A remote backend able to turn a prompt into free-form text."""

    provider_id: str = ""

    def __init__(
        self,
        settings: ProviderSettings,
        timeout: int = 120,
        temperature: float = 0.7,
        max_tokens: int = 4000,
    ) -> None:
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def display_name(self) -> str:
        return self.settings.name

    @property
    def model(self) -> str:
        return self.settings.default_model

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    async def _post_json(
        self,
        path: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST *payload* and return the decoded JSON body.

        Raises:
            BackendUnavailableError: The backend could not be reached, timed out or
                dropped the connection.
            BackendHTTPError: The backend answered with a non-2xx status.
            MalformedResponseError: The body is not a JSON object.
        """
        name = self.display_name
        try:
            async with self._client() as client:
                response = await client.post(path, json=payload, headers=headers or {})
        except httpx.ConnectError as exc:
            raise BackendUnavailableError(
                name, f"Cannot connect to {name} at {self.base_url}. Is the server running?"
            ) from exc
        except httpx.TimeoutException as exc:
            raise BackendUnavailableError(
                name, f"Request to {name} timed out after {self.timeout}s."
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise BackendUnavailableError(
                name, f"Cannot reach {name} at {self.base_url}: {exc}"
            ) from exc

        if not response.is_success:
            raise BackendHTTPError(name, response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError() from exc
        if not isinstance(data, dict):
            raise MalformedResponseError()
        return data

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @abstractmethod
    async def generate(self, prompt: str, system: str = "") -> str:
        """Send *prompt* (and an optional system instruction) and return the reply text."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Return ``True`` if the provider can currently accept requests."""

    async def status(self) -> str:
        """``"available"`` or ``"unavailable"``."""
        return AVAILABLE if await self.is_available() else UNAVAILABLE

    def describe(self) -> dict[str, Any]:
        """Static description used by provider listings."""
        return {
            "id": self.provider_id,
            "name": self.display_name,
            "models": list(self.settings.models),
            "default_model": self.model,
        }
