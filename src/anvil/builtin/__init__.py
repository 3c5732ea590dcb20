"""Plugins applied to every build, in this order."""

from __future__ import annotations

from anvil.builtin.action_configuration import (
    ProjectActionConfigurationFilesPlugin,
    ResolveActionConfigurationPathsPlugin,
    WorkspaceActionConfigurationFilesPlugin,
)
from anvil.builtin.clean import CleanPlugin
from anvil.plugins.base import PluginPackage


def create_builtin_plugins() -> list[PluginPackage]:
    """Fresh instances of the built-in plugins, in application order."""
    return [
        WorkspaceActionConfigurationFilesPlugin(),
        ProjectActionConfigurationFilesPlugin(),
        ResolveActionConfigurationPathsPlugin(),
        CleanPlugin(),
    ]


__all__ = [
    "WorkspaceActionConfigurationFilesPlugin",
    "ProjectActionConfigurationFilesPlugin",
    "ResolveActionConfigurationPathsPlugin",
    "CleanPlugin",
    "create_builtin_plugins",
]
