"""Unit tests for the request/result models (shopgen.models).

Tests cover:
- Lenient enum parsing for AppType, Framework, Feature
- AppConfiguration validation, immutability, feature de-duplication
- Canonical feature ordering and payload round trip
- GenerationResult failure helper
- recommended_defaults
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from shopgen.models import (
    AppConfiguration,
    AppType,
    Feature,
    Framework,
    GenerationResult,
    recommended_defaults,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TestLenientEnums:
    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["Node.js", "nodejs", "NodeJs", "NODE_JS", " node.js "])
    def test_framework_spellings(self, raw):
        assert Framework(raw) is Framework.NODE_JS

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["App Bridge", "AppBridge", "app_bridge", "APP BRIDGE"])
    def test_feature_spellings(self, raw):
        assert Feature(raw) is Feature.APP_BRIDGE

    @pytest.mark.unit
    def test_app_type_by_name(self):
        assert AppType("storefront_extension") is AppType.STOREFRONT_EXTENSION

    @pytest.mark.unit
    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            Framework("Django")

    @pytest.mark.unit
    def test_feature_definition_order(self):
        assert [f.value for f in Feature] == ["GraphQL", "Polaris", "App Bridge", "Webhooks", "OAuth"]


# ---------------------------------------------------------------------------
# AppConfiguration
# ---------------------------------------------------------------------------


class TestAppConfiguration:
    @pytest.mark.unit
    def test_from_form_payload(self, inventory_payload):
        config = AppConfiguration.model_validate(inventory_payload)
        assert config.app_type is AppType.ADMIN_APP
        assert config.framework is Framework.NODE_JS
        assert config.features == frozenset({Feature.OAUTH})
        assert config.description == "Track inventory levels"

    @pytest.mark.unit
    def test_field_names_accepted(self):
        config = AppConfiguration(app_type="Theme App", framework="rails", description="x")
        assert config.app_type is AppType.THEME_APP
        assert config.framework is Framework.RAILS
        assert config.features == frozenset()

    @pytest.mark.unit
    def test_duplicate_features_collapse(self):
        config = AppConfiguration(
            app_type="Admin App", framework="Remix",
            features=["OAuth", "oauth", "OAuth"], description="x",
        )
        assert config.features == frozenset({Feature.OAUTH})

    @pytest.mark.unit
    def test_null_features_means_none(self):
        config = AppConfiguration(app_type="Admin App", framework="Remix", features=None, description="x")
        assert config.features == frozenset()

    @pytest.mark.unit
    @pytest.mark.parametrize("description", ["", "   ", "\n\t"])
    def test_blank_description_rejected(self, description):
        with pytest.raises(ValidationError):
            AppConfiguration(app_type="Admin App", framework="Remix", description=description)

    @pytest.mark.unit
    def test_missing_framework_rejected(self):
        with pytest.raises(ValidationError):
            AppConfiguration.model_validate({"appType": "Admin App", "description": "x"})

    @pytest.mark.unit
    def test_unknown_feature_rejected(self):
        with pytest.raises(ValidationError):
            AppConfiguration(app_type="Admin App", framework="Remix", features=["Blockchain"], description="x")

    @pytest.mark.unit
    def test_single_string_features_rejected(self):
        with pytest.raises(ValidationError):
            AppConfiguration(app_type="Admin App", framework="Remix", features="OAuth", description="x")

    @pytest.mark.unit
    def test_immutable(self, inventory_config):
        with pytest.raises(ValidationError):
            inventory_config.description = "changed"

    @pytest.mark.unit
    def test_structural_equality(self):
        a = AppConfiguration(app_type="Admin App", framework="Remix", features=["OAuth", "GraphQL"], description="x")
        b = AppConfiguration(app_type="Admin App", framework="Remix", features=["GraphQL", "OAuth"], description="x")
        assert a == b

    @pytest.mark.unit
    def test_ordered_features_are_canonical(self):
        config = AppConfiguration(
            app_type="Admin App", framework="Remix",
            features=["OAuth", "Webhooks", "GraphQL"], description="x",
        )
        assert config.ordered_features() == [Feature.GRAPHQL, Feature.WEBHOOKS, Feature.OAUTH]

    @pytest.mark.unit
    def test_to_payload(self, remix_config):
        assert remix_config.to_payload() == {
            "appType": "Admin App",
            "framework": "Remix",
            "features": ["Polaris", "OAuth"],
            "description": "Track inventory levels",
        }
        assert AppConfiguration.model_validate(remix_config.to_payload()) == remix_config


# ---------------------------------------------------------------------------
# GenerationResult & defaults
# ---------------------------------------------------------------------------


class TestGenerationResult:
    @pytest.mark.unit
    def test_defaults(self):
        result = GenerationResult()
        assert result.success is True
        assert result.files == {}
        assert result.error is None
        assert result.source == "local"

    @pytest.mark.unit
    def test_failure(self):
        result = GenerationResult.failure("boom", "MalformedResponseError", source="openai")
        assert result.success is False
        assert result.error == "boom"
        assert result.error_kind == "MalformedResponseError"
        assert result.source == "openai"
        assert result.files == {}


class TestRecommendedDefaults:
    @pytest.mark.unit
    def test_values(self):
        assert recommended_defaults() == {
            "appType": "Admin App",
            "framework": "Node.js",
            "features": ["OAuth", "Polaris"],
        }

    @pytest.mark.unit
    def test_valid_once_description_added(self):
        config = AppConfiguration.model_validate({**recommended_defaults(), "description": "x"})
        assert config.features == frozenset({Feature.OAUTH, Feature.POLARIS})
