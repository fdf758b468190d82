"""Pydantic v2 models for scaffold requests and results.

Defines the enumerations a user can pick on the generation form, the
immutable ``AppConfiguration`` built from a request payload, and the
``GenerationResult`` handed back to callers.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FileMapping = dict[str, str]


def _normalise(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())


class _LenientEnum(str, Enum):
    """String enum that also accepts loosely-spelled values.

    ``"nodejs"``, ``"NodeJs"`` and ``"node.js"`` all resolve to the member
    whose value is ``"Node.js"``.  Matching ignores case and anything that is
    not a letter or digit, and is tried against both member values and names.
    """

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if not isinstance(value, str):
            return None
        wanted = _normalise(value)
        for member in cls:
            if wanted in (_normalise(member.value), _normalise(member.name)):
                return member
        return None


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class AppType(_LenientEnum):
    """Where the generated app runs."""
    ADMIN_APP = "Admin App"
    STOREFRONT_EXTENSION = "Storefront Extension"
    THEME_APP = "Theme App"


class Framework(_LenientEnum):
    """Server framework of the generated app."""
    NODE_JS = "Node.js"
    REMIX = "Remix"
    RAILS = "Rails"


class Feature(_LenientEnum):
    """Optional capabilities.  Definition order is the canonical output order."""
    GRAPHQL = "GraphQL"
    POLARIS = "Polaris"
    APP_BRIDGE = "App Bridge"
    WEBHOOKS = "Webhooks"
    OAUTH = "OAuth"


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------

class AppConfiguration(BaseModel):
    """Validated, immutable description of the scaffold to generate.

    Accepts both the snake_case field names and the camelCase ``appType``
    key used by the web form.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_type: AppType = Field(..., alias="appType", description="Where the app runs")
    framework: Framework = Field(..., description="Server framework")
    features: frozenset[Feature] = Field(
        default_factory=frozenset, description="Enabled optional capabilities"
    )
    description: str = Field(..., description="Free-text description of the app")

    @field_validator("app_type", mode="before")
    @classmethod
    def _coerce_app_type(cls, value: Any) -> Any:
        return AppType(value) if isinstance(value, str) else value

    @field_validator("framework", mode="before")
    @classmethod
    def _coerce_framework(cls, value: Any) -> Any:
        return Framework(value) if isinstance(value, str) else value

    @field_validator("features", mode="before")
    @classmethod
    def _coerce_features(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            raise ValueError("features must be a list, not a single string")
        return frozenset(Feature(v) if isinstance(v, str) else v for v in value)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be empty")
        return value

    def ordered_features(self) -> list[Feature]:
        """Enabled features in canonical (enum definition) order."""
        return [feature for feature in Feature if feature in self.features]

    def to_payload(self) -> dict[str, Any]:
        """Serialise back to the web-form payload shape."""
        return {
            "appType": self.app_type.value,
            "framework": self.framework.value,
            "features": [f.value for f in self.ordered_features()],
            "description": self.description,
        }


class GenerationResult(BaseModel):
    """Outcome of a single generation request."""

    success: bool = Field(default=True, description="Whether generation succeeded")
    files: FileMapping = Field(default_factory=dict, description="Generated path -> content")
    error: Optional[str] = Field(default=None, description="Error message on failure")
    error_kind: Optional[str] = Field(default=None, description="Error class name on failure")
    source: str = Field(default="local", description="'local' or the remote provider id")

    @classmethod
    def failure(cls, message: str, kind: str, source: str = "local") -> "GenerationResult":
        return cls(success=False, error=message, error_kind=kind, source=source)


# ---------------------------------------------------------------------------
# Recommended defaults
# ---------------------------------------------------------------------------

RECOMMENDED_APP_TYPE = AppType.ADMIN_APP
RECOMMENDED_FRAMEWORK = Framework.NODE_JS
RECOMMENDED_FEATURES: tuple[Feature, ...] = (Feature.OAUTH, Feature.POLARIS)


def recommended_defaults() -> dict[str, Any]:
    """Form defaults suggested to first-time users.

    The description is deliberately absent: it is always left to the user.
    """
    return {
        "appType": RECOMMENDED_APP_TYPE.value,
        "framework": RECOMMENDED_FRAMEWORK.value,
        "features": [f.value for f in RECOMMENDED_FEATURES],
    }
