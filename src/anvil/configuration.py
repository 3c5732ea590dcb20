"""Read-only build context shared by all plugins."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from anvil.config import Settings, settings as default_settings


@dataclass(frozen=True)
class BuildConfiguration:
    """Paths describing the project being built."""

    build_folder: Path
    project_data_folder: Path
    plugin_config_path: Path
    workspace_root: Optional[Path] = None
    workspace_config_folder: Optional[Path] = None

    @classmethod
    def initialize(
        cls,
        build_folder: Path | str,
        settings: Settings | None = None,
    ) -> BuildConfiguration:
        """Derive the configuration for the project rooted at ``build_folder``."""
        settings = settings or default_settings
        build_folder = Path(build_folder).resolve()
        data_folder = build_folder / settings.data_folder_name
        workspace_root = find_workspace_root(build_folder, settings.workspace_marker)
        return cls(
            build_folder=build_folder,
            project_data_folder=data_folder,
            plugin_config_path=data_folder / settings.plugin_config_filename,
            workspace_root=workspace_root,
            workspace_config_folder=(
                workspace_root / settings.workspace_config_folder
                if workspace_root is not None
                else None
            ),
        )


def find_workspace_root(start: Path, marker: str) -> Optional[Path]:
    """Nearest directory at or above ``start`` that contains ``marker``."""
    for directory in [start, *start.parents]:
        if (directory / marker).is_file():
            return directory
    return None
