"""Shared mutable build state passed to every plugin's ``apply``.

Plugins communicate only through the compilation: they tap its hooks and
read or write its stores. Hooks run their taps in tap order, and taps are
registered in plugin application order, so a later plugin always observes
the effects of the earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger


class Hook:
    """A named, ordered list of callbacks."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: list[tuple[str, Callable[..., None]]] = []

    def tap(self, name: str, callback: Callable[..., None]) -> None:
        """Register ``callback`` under ``name`` (usually a plugin's display name)."""
        self._taps.append((name, callback))

    @property
    def taps(self) -> list[str]:
        return [name for name, _ in self._taps]

    def call(self, *args: Any, **kwargs: Any) -> None:
        for name, callback in self._taps:
            logger.debug(f"Hook {self.name}: running {name}")
            callback(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<Hook {self.name} taps={self.taps}>"


@dataclass
class CompilationHooks:
    load_action_configuration: Hook = field(
        default_factory=lambda: Hook("load_action_configuration")
    )
    clean: Hook = field(default_factory=lambda: Hook("clean"))
    build: Hook = field(default_factory=lambda: Hook("build"))


class BuildCompilation:
    """State accumulated by plugins over one build."""

    def __init__(self) -> None:
        self.hooks = CompilationHooks()
        # action name -> merged action configuration
        self.action_configuration: dict[str, dict[str, Any]] = {}
        # Free-form store for plugins that share data with each other
        self.properties: dict[str, Any] = {}

    def load_action_configuration(self, action: str) -> dict[str, Any]:
        """Rebuild the configuration for ``action`` by running its hook."""
        self.action_configuration[action] = {}
        self.hooks.load_action_configuration.call(action)
        return self.action_configuration[action]

    def run_clean(self) -> None:
        """Load the ``clean`` action configuration and run the clean hook."""
        clean_configuration = self.load_action_configuration("clean")
        self.hooks.clean.call(clean_configuration)

    def run_build(self) -> None:
        build_configuration = self.load_action_configuration("build")
        self.hooks.build.call(build_configuration)
