"""The per-project plugin list (``.anvil/plugins.json``).

Format::

    {
      "plugins": [
        {"plugin": "my_plugin", "options": {"key": "value"}},
        {"plugin": "./local/plugin.py"}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from anvil.plugins.errors import ConfigNotFoundError, ConfigParseError, ConfigSchemaError


class PluginConfigurationEntry(BaseModel):
    """One plugin to load: a specifier plus optional plugin-owned options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    plugin: str = Field(min_length=1, description="Package name or path of the plugin")
    options: Optional[dict[str, Any]] = Field(
        default=None, description="Options passed to the plugin's apply()"
    )


class PluginConfigurationFile(BaseModel):
    """Top-level document of the plugin configuration file."""

    model_config = ConfigDict(extra="forbid")

    plugins: list[PluginConfigurationEntry]


def plugin_configuration_schema() -> dict[str, Any]:
    """JSON schema of the plugin configuration file."""
    return PluginConfigurationFile.model_json_schema()


def load_plugin_configuration(path: Path) -> list[PluginConfigurationEntry]:
    """Read and validate the plugin list at ``path``, preserving file order.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigParseError: If the file is not valid JSON.
        ConfigSchemaError: If the document does not match the schema.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFoundError(path) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, e) from e

    try:
        document = PluginConfigurationFile.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigSchemaError(path, e) from e

    return list(document.plugins)
