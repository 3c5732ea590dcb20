"""Shared fixtures for anvil tests."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from loguru import logger

from anvil.compilation import BuildCompilation
from anvil.config import Settings
from anvil.configuration import BuildConfiguration


class FakeModuleLoader:
    """In-memory module loader.

    ``modules`` maps a specifier to the object its import returns. An
    exception instance is raised on import instead of returned.
    """

    def __init__(self, modules: dict[str, Any] | None = None) -> None:
        self.modules = dict(modules or {})
        self.resolved: list[str] = []
        self.imported: list[str] = []

    def resolve(self, specifier: str, base_directory: Path) -> Path:
        if specifier not in self.modules:
            raise ModuleNotFoundError(f"Cannot find module '{specifier}'")
        self.resolved.append(specifier)
        return base_directory / "site-plugins" / f"{specifier}.py"

    def import_module(self, path: Path) -> Any:
        self.imported.append(path.stem)
        value = self.modules[path.stem]
        if isinstance(value, BaseException):
            raise value
        return value


def make_plugin(display_name: str, calls: list, effect=None) -> SimpleNamespace:
    """Plugin object that records (display_name, options) when applied."""

    def apply(compilation, configuration, options=None):
        calls.append((display_name, options))
        if effect is not None:
            effect(compilation, configuration, options)

    return SimpleNamespace(display_name=display_name, apply=apply)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def build_folder(tmp_path) -> Path:
    folder = tmp_path / "project"
    folder.mkdir()
    return folder


@pytest.fixture
def configuration(build_folder, settings) -> BuildConfiguration:
    return BuildConfiguration.initialize(build_folder, settings)


@pytest.fixture
def compilation() -> BuildCompilation:
    return BuildCompilation()


@pytest.fixture
def log_messages():
    """Collect loguru messages (all levels) emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def plugin_factory():
    return make_plugin


@pytest.fixture
def loader_factory():
    return FakeModuleLoader
