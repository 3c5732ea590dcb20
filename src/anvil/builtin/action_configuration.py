"""Built-ins that assemble per-action configuration.

Each action (``clean``, ``build``) may be configured by JSON files in two
places, applied in this order:

1. ``<workspace_root>/config/anvil/<action>.json`` — shared by a workspace
2. ``<project>/.anvil/<action>.json`` — overrides for one project

A third plugin then rewrites path-valued settings to absolute paths, so
later plugins never deal with relative paths.
"""

from __future__ import annotations

import json
from abc import abstractmethod
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from anvil.compilation import BuildCompilation
from anvil.configuration import BuildConfiguration
from anvil.plugins.base import PluginBase, PluginOptions
from anvil.plugins.errors import ConfigParseError

# action -> keys whose values are lists of paths relative to the build folder
PATH_PROPERTIES: dict[str, tuple[str, ...]] = {
    "clean": ("pathsToDelete",),
}


def read_action_configuration_file(path: Path) -> Optional[dict[str, Any]]:
    """Parse an action configuration file, or return None if it is absent."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, e) from e
    if not isinstance(data, dict):
        raise ConfigParseError(path, ValueError("top-level value must be an object"))
    return data


class _ActionConfigurationFilesPlugin(PluginBase):
    """Merges ``<folder>/<action>.json`` into the compilation's action store."""

    @abstractmethod
    def _folder(self, configuration: BuildConfiguration) -> Optional[Path]:
        """Folder holding the action files, or None if there is none."""

    def apply(
        self,
        compilation: BuildCompilation,
        configuration: BuildConfiguration,
        options: PluginOptions = None,
    ) -> None:
        folder = self._folder(configuration)

        def _load(action: str) -> None:
            if folder is None:
                return
            path = folder / f"{action}.json"
            data = read_action_configuration_file(path)
            if data is None:
                return
            logger.debug(f"Loaded {action} configuration from {path}")
            compilation.action_configuration.setdefault(action, {}).update(data)

        compilation.hooks.load_action_configuration.tap(self.display_name, _load)


class WorkspaceActionConfigurationFilesPlugin(_ActionConfigurationFilesPlugin):
    display_name = "WorkspaceActionConfigurationFilesPlugin"

    def _folder(self, configuration: BuildConfiguration) -> Optional[Path]:
        return configuration.workspace_config_folder


class ProjectActionConfigurationFilesPlugin(_ActionConfigurationFilesPlugin):
    display_name = "ProjectActionConfigurationFilesPlugin"

    def _folder(self, configuration: BuildConfiguration) -> Optional[Path]:
        return configuration.project_data_folder


class ResolveActionConfigurationPathsPlugin(PluginBase):
    """Makes path-valued action settings absolute against the build folder."""

    display_name = "ResolveActionConfigurationPathsPlugin"

    def apply(
        self,
        compilation: BuildCompilation,
        configuration: BuildConfiguration,
        options: PluginOptions = None,
    ) -> None:
        def _resolve(action: str) -> None:
            action_configuration = compilation.action_configuration.get(action, {})
            for key in PATH_PROPERTIES.get(action, ()):
                paths = action_configuration.get(key)
                if not paths:
                    continue
                action_configuration[key] = [
                    str((configuration.build_folder / p).resolve()) for p in paths
                ]

        compilation.hooks.load_action_configuration.tap(self.display_name, _resolve)
