"""Tests for config section models: defaults and frozen instances."""

import pytest
from pydantic import ValidationError

from fieldcheck.config.models import DEFAULT_PLUGIN_DIR, PluginsConfig, RulesConfig


class TestSectionModels:
    def test_defaults(self) -> None:
        assert RulesConfig().file is None
        plugins = PluginsConfig()
        assert plugins.enabled is True
        assert plugins.local_dir == DEFAULT_PLUGIN_DIR

    def test_sparse_override(self) -> None:
        plugins = PluginsConfig.model_validate({"enabled": False})
        assert plugins.enabled is False
        assert plugins.local_dir == DEFAULT_PLUGIN_DIR

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ValidationError):
            PluginsConfig.model_validate({"enabled": "maybe"})

    def test_frozen(self) -> None:
        cfg = PluginsConfig()
        with pytest.raises(ValidationError):
            cfg.enabled = False  # type: ignore[misc]
