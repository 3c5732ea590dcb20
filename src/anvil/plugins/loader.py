"""Import a resolved plugin module and check it against the plugin contract."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger

from anvil.plugins.base import PluginPackage
from anvil.plugins.errors import LoadError, ValidationError
from anvil.plugins.modules import ModuleLoader


def unwrap_default_export(loaded: Any) -> Any:
    """Return ``loaded.default`` when present, else ``loaded`` itself."""
    default = getattr(loaded, "default", None)
    if default is not None:
        return default
    return loaded


def validate_plugin_package(candidate: Any, source: str) -> PluginPackage:
    """Check ``candidate`` satisfies the plugin contract.

    Checks run in order: the candidate exists, ``apply`` is callable,
    ``display_name`` is a non-empty string. ``source`` names where the
    candidate came from and is cited in every failure message.
    """
    if candidate is None:
        raise ValidationError(
            source,
            "missing",
            f'Plugin package loaded from "{source}" is None.',
        )

    if not callable(getattr(candidate, "apply", None)):
        raise ValidationError(
            source,
            "apply",
            'Plugin packages must define an "apply" function. The plugin loaded '
            f'from "{source}" either doesn\'t define an "apply" attribute, or '
            "its value isn't callable.",
        )

    display_name = getattr(candidate, "display_name", None)
    if not isinstance(display_name, str) or not display_name:
        raise ValidationError(
            source,
            "display_name",
            'Plugin packages must define a "display_name" attribute. The plugin '
            f'loaded from "{source}" either doesn\'t define a "display_name" '
            "attribute, or its value isn't a non-empty string.",
        )

    return candidate


def load_plugin_package(resolved_path: Path, module_loader: ModuleLoader) -> PluginPackage:
    """Import the module at ``resolved_path`` and validate what it exports.

    Raises:
        LoadError: If importing or executing the module raises.
        ValidationError: If the exported value is not a valid plugin.
    """
    try:
        loaded = module_loader.import_module(resolved_path)
    except Exception as e:
        raise LoadError(resolved_path, e) from e

    logger.debug(f'Loaded plugin package from "{resolved_path}"')

    return validate_plugin_package(unwrap_default_export(loaded), str(resolved_path))
