"""Exception types raised while resolving, loading and applying plugins.

Every error carries enough context (specifier, resolved path or display
name) to locate the offending plugin. Only ``ConfigNotFoundError`` is
recoverable: a project without a plugin configuration file simply
contributes no plugins. Everything else aborts the current initialization
call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class AnvilError(Exception):
    """Base exception for all anvil errors."""

    recoverable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================================
# Plugin pipeline errors
# ============================================================================


class PluginError(AnvilError):
    """Base exception for plugin pipeline failures."""


class ResolutionError(PluginError):
    """Raised when a specifier cannot be resolved from a base directory."""

    def __init__(self, specifier: str, base_directory: Path | str, reason: str | None = None):
        message = f'Error resolving specified plugin "{specifier}".'
        if reason:
            message = f"{message} Resolve error: {reason}"
        super().__init__(message, {"base_directory": str(base_directory)})
        self.specifier = specifier
        self.base_directory = Path(base_directory)


class LoadError(PluginError):
    """Raised when importing a resolved plugin module fails."""

    def __init__(self, path: Path | str, cause: BaseException):
        super().__init__(f'Error loading plugin package from "{path}": {cause}')
        self.path = Path(path)


class ValidationError(PluginError):
    """Raised when a loaded object does not satisfy the plugin contract.

    ``reason`` is one of ``"missing"``, ``"apply"`` or ``"display_name"``.
    """

    def __init__(self, source: str, reason: str, message: str):
        super().__init__(message)
        self.source = source
        self.reason = reason


class ApplicationError(PluginError):
    """Raised when a plugin's own ``apply`` raises."""

    def __init__(self, display_name: str, cause: BaseException):
        super().__init__(f'Error applying "{display_name}": {cause}')
        self.display_name = display_name


# ============================================================================
# Configuration file errors
# ============================================================================


class ConfigError(AnvilError):
    """Base exception for configuration files read by anvil."""

    def __init__(self, path: Path | str, message: str):
        super().__init__(message, {"path": str(path)})
        self.path = Path(path)


class ConfigNotFoundError(ConfigError):
    """Raised when a configuration file does not exist."""

    recoverable = True

    def __init__(self, path: Path | str):
        super().__init__(path, f"Configuration file not found: {path}")


class ConfigParseError(ConfigError):
    """Raised when a configuration file is not valid JSON."""

    def __init__(self, path: Path | str, cause: BaseException):
        super().__init__(path, f"Configuration file {path} is not valid JSON: {cause}")


class ConfigSchemaError(ConfigError):
    """Raised when a configuration file does not match its schema."""

    def __init__(self, path: Path | str, cause: BaseException):
        super().__init__(path, f"Configuration file {path} failed schema validation: {cause}")
