"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fieldcheck.toml only contains
overrides. An empty file (or no file) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_PLUGIN_DIR = ".fieldcheck/plugins"


class RulesConfig(BaseModel):
    """[rules] section."""

    model_config = {"frozen": True}

    file: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = DEFAULT_PLUGIN_DIR
