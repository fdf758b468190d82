"""Remote scaffold generation through a language-model provider.

This path is best-effort and less reliable than local assembly: the model
is asked to answer with a JSON object carrying a ``files`` property, and
the first top-level balanced-brace span of its reply is parsed.  There are
no retries and no backend-specific schema enforcement.
"""

from __future__ import annotations

import json
import textwrap

from shopgen.errors import MalformedResponseError
from shopgen.models import AppConfiguration, FileMapping
from shopgen.providers.base import LLMProvider

SYSTEM_PROMPT = (
    "You are a Shopify app development expert. Generate complete app scaffolds "
    "based on user requirements. Return a JSON object with a \"files\" property "
    "containing file paths as keys and file contents as values."
)

_EXAMPLE_RESPONSE = textwrap.dedent(
    """\
    {
      "files": {
        "package.json": "{\\"name\\": \\"shopify-app\\", ...}",
        "index.js": "const express = require('express'); ...",
        "README.md": "# Shopify App\\n\\n..."
      }
    }"""
)


def build_prompt(config: AppConfiguration) -> str:
    """Describe *config* in natural language for a generation backend."""
    features = ", ".join(f.value for f in config.ordered_features())
    lines = [
        "Generate a Shopify app with these requirements:",
        f"- App Type: {config.app_type.value}",
        f"- Framework: {config.framework.value}",
        f"- Features: {features}",
        f"- Description: {config.description}",
        "",
        "Return a JSON object with a 'files' property containing file paths as keys "
        "and file contents as values.",
        "",
        "Example format:",
        _EXAMPLE_RESPONSE,
    ]
    return "\n".join(lines)


def find_json_object(text: str) -> str | None:
    """Return the first top-level balanced ``{...}`` span in *text*.

    Braces inside JSON string literals (including escaped quotes) are not
    counted.  Returns ``None`` when there is no opening brace or the span
    never closes.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]
    return None


def extract_files(raw_text: str) -> FileMapping:
    """Pull the ``files`` mapping out of free-form model output.

    Raises:
        MalformedResponseError: If no balanced JSON object is found, it does
            not parse, or it lacks a ``files`` object of string values.
    """
    span = find_json_object(raw_text)
    if span is None:
        raise MalformedResponseError()
    try:
        parsed = json.loads(span)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError() from exc

    files = parsed.get("files") if isinstance(parsed, dict) else None
    if not isinstance(files, dict):
        raise MalformedResponseError()
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in files.items()):
        raise MalformedResponseError()
    return files


class RemoteGenerator:
    """Generates a ``FileMapping`` by prompting a remote provider."""

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    async def generate(self, config: AppConfiguration) -> FileMapping:
        """Prompt the provider once and parse its reply.

        Provider errors propagate unchanged; unparseable replies raise
        ``MalformedResponseError``.
        """
        raw_text = await self.provider.generate(build_prompt(config), system=SYSTEM_PROMPT)
        return extract_files(raw_text)
