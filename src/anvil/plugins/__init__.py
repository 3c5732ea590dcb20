"""Anvil plugin system.

Resolves plugin specifiers, loads and validates plugin modules, and
applies them in a deterministic order to a shared build compilation.
"""

from anvil.plugins.base import PluginBase, PluginOptions, PluginPackage
from anvil.plugins.errors import (
    AnvilError,
    ApplicationError,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigSchemaError,
    LoadError,
    PluginError,
    ResolutionError,
    ValidationError,
)
from anvil.plugins.manager import PluginEntry, PluginManager, apply_plugin
from anvil.plugins.modules import FileSystemModuleLoader, ModuleLoader

__all__ = [
    "PluginBase",
    "PluginOptions",
    "PluginPackage",
    "PluginManager",
    "PluginEntry",
    "apply_plugin",
    "ModuleLoader",
    "FileSystemModuleLoader",
    "AnvilError",
    "PluginError",
    "ResolutionError",
    "LoadError",
    "ValidationError",
    "ApplicationError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigSchemaError",
]
