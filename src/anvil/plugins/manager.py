"""Plugin manager — resolution, loading, validation and application.

Every entry runs the same pipeline:
  resolve() -> load() -> validate() -> apply()

Entries come from three places and are always applied in this order:
1. Built-in plugins (fixed list, already in-process, skip resolve/load)
2. The project's plugin configuration file (``.anvil/plugins.json``)
3. Plugins named explicitly via initialize_plugin()

Execution is strictly sequential and fail-fast: the first error aborts the
rest of the sequence and propagates. Plugins applied before the failure
stay applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from loguru import logger

from anvil.compilation import BuildCompilation
from anvil.configuration import BuildConfiguration
from anvil.plugins.base import PluginOptions, PluginPackage
from anvil.plugins.config_file import load_plugin_configuration
from anvil.plugins.errors import ApplicationError, ConfigNotFoundError
from anvil.plugins.loader import load_plugin_package, validate_plugin_package
from anvil.plugins.modules import FileSystemModuleLoader, ModuleLoader
from anvil.plugins.resolver import resolve_plugin


@dataclass(frozen=True)
class PluginEntry:
    """One step of the application sequence.

    Either ``package`` is set (built-in) or ``specifier`` is (loaded).
    """

    specifier: Optional[str] = None
    options: PluginOptions = None
    package: Optional[PluginPackage] = None

    @classmethod
    def builtin(cls, package: PluginPackage) -> PluginEntry:
        return cls(package=package)

    @classmethod
    def from_specifier(cls, specifier: str, options: PluginOptions = None) -> PluginEntry:
        return cls(specifier=specifier, options=options)


def apply_plugin(
    package: PluginPackage,
    compilation: BuildCompilation,
    configuration: BuildConfiguration,
    options: PluginOptions = None,
) -> None:
    """Run ``package.apply``; wrap anything it raises in ApplicationError."""
    try:
        package.apply(compilation, configuration, options)
    except Exception as e:
        raise ApplicationError(package.display_name, e) from e


class PluginManager:
    """Applies built-in and external plugins to one compilation."""

    def __init__(
        self,
        configuration: BuildConfiguration,
        compilation: BuildCompilation,
        module_loader: ModuleLoader | None = None,
        builtin_plugins: Sequence[PluginPackage] | None = None,
    ) -> None:
        self._configuration = configuration
        self._compilation = compilation
        self._module_loader = module_loader or FileSystemModuleLoader()
        if builtin_plugins is None:
            from anvil.builtin import create_builtin_plugins
            builtin_plugins = create_builtin_plugins()
        self._builtin_plugins: list[PluginPackage] = list(builtin_plugins)
        self._applied: list[str] = []

    @property
    def configuration(self) -> BuildConfiguration:
        return self._configuration

    @property
    def compilation(self) -> BuildCompilation:
        return self._compilation

    @property
    def applied_plugins(self) -> list[str]:
        """Display names of applied plugins, in application order."""
        return list(self._applied)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def initialize_default_plugins(self) -> None:
        """Apply the built-in plugins in their fixed order."""
        self._run(self._builtin_entries())

    def initialize_plugin(self, specifier: str, options: PluginOptions = None) -> None:
        """Resolve, load, validate and apply one named plugin."""
        self._run([PluginEntry.from_specifier(specifier, options)])

    def initialize_plugins_from_config_file(self) -> None:
        """Apply every plugin listed in the project's plugin configuration file.

        A missing file contributes no plugins. Any other problem with the
        file, or with any listed plugin, propagates.
        """
        self._run(self._config_file_entries())

    def initialize_all(self, specifiers: Iterable[str] = ()) -> None:
        """Built-ins, then config-file plugins, then ``specifiers``, as one sequence."""
        entries = self._builtin_entries()
        entries.extend(self._config_file_entries())
        entries.extend(PluginEntry.from_specifier(s) for s in specifiers)
        self._run(entries)

    # ------------------------------------------------------------------
    # Sequence construction
    # ------------------------------------------------------------------

    def _builtin_entries(self) -> list[PluginEntry]:
        return [PluginEntry.builtin(p) for p in self._builtin_plugins]

    def _config_file_entries(self) -> list[PluginEntry]:
        path = self._configuration.plugin_config_path
        try:
            config_entries = load_plugin_configuration(path)
        except ConfigNotFoundError:
            logger.debug(f"No plugin configuration file at {path}")
            return []
        logger.debug(f"Read {len(config_entries)} plugin(s) from {path}")
        return [
            PluginEntry.from_specifier(e.plugin, e.options) for e in config_entries
        ]

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, entries: Sequence[PluginEntry]) -> None:
        for entry in entries:
            package = self._prepare(entry)
            apply_plugin(package, self._compilation, self._configuration, entry.options)
            self._applied.append(package.display_name)
            logger.debug(f"Applied plugin {package.display_name}")

    def _prepare(self, entry: PluginEntry) -> PluginPackage:
        if entry.package is not None:
            # Built-ins are checked with the same validator as loaded plugins
            return validate_plugin_package(
                entry.package, f"built-in {type(entry.package).__name__}"
            )
        resolved_path = resolve_plugin(
            entry.specifier or "",
            self._configuration.build_folder,
            self._module_loader,
        )
        return load_plugin_package(resolved_path, self._module_loader)
