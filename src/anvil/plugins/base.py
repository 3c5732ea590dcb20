"""Plugin contract for anvil extensions.

Every plugin, built-in or dynamically loaded, must provide:
- display_name: str  — identifies the plugin in diagnostics
- apply(compilation, configuration, options=None) — hooks into the build

The contract is structural (``PluginPackage``) so external plugin modules
do not need to inherit from anything: a module that defines a module-level
``display_name`` and ``apply`` is itself a valid plugin. ``PluginBase`` is
provided for class-based plugins that prefer an explicit base.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from anvil.compilation import BuildCompilation
    from anvil.configuration import BuildConfiguration


# Plugin-owned options blob. The manager passes it through untouched.
PluginOptions = Any


@runtime_checkable
class PluginPackage(Protocol):
    """The shape every accepted plugin has."""

    display_name: str

    def apply(
        self,
        compilation: BuildCompilation,
        configuration: BuildConfiguration,
        options: PluginOptions = None,
    ) -> None:
        ...


class PluginBase(ABC):
    """Optional base class for class-based plugins.

    Subclasses must define:
    - display_name: str (class attribute or property)

    And implement:
    - apply() — tap hooks or mutate the compilation
    """

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name used in diagnostics."""

    @abstractmethod
    def apply(
        self,
        compilation: BuildCompilation,
        configuration: BuildConfiguration,
        options: PluginOptions = None,
    ) -> None:
        """Register with the compilation. Called exactly once per application."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.display_name!r}>"
