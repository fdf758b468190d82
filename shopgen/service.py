"""Generation service -- the single inbound request operation.

Validates a form payload into an ``AppConfiguration``, waits the configured
artificial delay, then assembles locally or delegates to the selected
remote provider.  Every expected failure comes back as a failed
``GenerationResult``; nothing is retried and nothing is raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from shopgen.config import LOCAL_PROVIDER, Settings
from shopgen.errors import ConfigurationValidationError, ScaffoldError
from shopgen.models import AppConfiguration, GenerationResult
from shopgen.providers import LLMProvider, available_providers, get_provider
from shopgen.remote import RemoteGenerator
from shopgen.scaffolder.assembler import TemplateAssembler

logger = logging.getLogger(__name__)


def parse_configuration(payload: Mapping[str, Any]) -> AppConfiguration:
    """Validate a raw payload.

    Raises:
        ConfigurationValidationError: Naming the first offending field.
    """
    try:
        return AppConfiguration.model_validate(dict(payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "payload"
        raise ConfigurationValidationError(f"Invalid {field}: {first.get('msg', 'invalid value')}") from exc


class GenerationService:
    """Turns generation payloads into ``GenerationResult`` objects."""

    def __init__(
        self,
        settings: Settings | None = None,
        assembler: TemplateAssembler | None = None,
        provider: LLMProvider | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.assembler = assembler or TemplateAssembler()
        self._provider = provider

    @property
    def source(self) -> str:
        if self._provider is not None:
            return self._provider.provider_id
        return self.settings.provider

    def _remote_provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = get_provider(self.settings.provider, self.settings)
        return self._provider

    async def generate(self, payload: Mapping[str, Any]) -> GenerationResult:
        """Handle one generation request."""
        source = self.source
        try:
            config = parse_configuration(payload)
        except ConfigurationValidationError as exc:
            return GenerationResult.failure(str(exc), exc.kind, source)

        if self.settings.generation_delay > 0:
            await asyncio.sleep(self.settings.generation_delay)

        try:
            if source == LOCAL_PROVIDER:
                files = self.assembler.assemble(config)
            else:
                files = await RemoteGenerator(self._remote_provider()).generate(config)
        except ScaffoldError as exc:
            logger.warning("Generation via %s failed: %s", source, exc)
            return GenerationResult.failure(str(exc), exc.kind, source)

        logger.info("Generated %d files via %s", len(files), source)
        return GenerationResult(success=True, files=files, source=source)

    async def provider_statuses(self) -> dict[str, str]:
        """Availability of every registered remote provider."""
        statuses: dict[str, str] = {}
        for provider_id in available_providers():
            provider = get_provider(provider_id, self.settings)
            statuses[provider_id] = await provider.status()
        return statuses
