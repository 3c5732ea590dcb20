"""Deletes the paths listed in the ``clean`` action configuration."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from loguru import logger

from anvil.compilation import BuildCompilation
from anvil.configuration import BuildConfiguration
from anvil.plugins.base import PluginBase, PluginOptions


class CleanPlugin(PluginBase):
    display_name = "CleanPlugin"

    def apply(
        self,
        compilation: BuildCompilation,
        configuration: BuildConfiguration,
        options: PluginOptions = None,
    ) -> None:
        compilation.hooks.clean.tap(self.display_name, self._clean)

    def _clean(self, clean_configuration: dict[str, Any]) -> None:
        paths = clean_configuration.get("pathsToDelete", [])
        if not paths:
            logger.info("Nothing to clean")
            return
        for raw_path in paths:
            path = Path(raw_path)
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
            else:
                logger.debug(f"Skipping missing path {path}")
                continue
            logger.info(f"Deleted {path}")
