"""Turn a plugin specifier into an absolute module location."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from anvil.plugins.errors import ResolutionError
from anvil.plugins.modules import ModuleLoader


def resolve_plugin(
    specifier: str,
    base_directory: Path,
    module_loader: ModuleLoader,
) -> Path:
    """Resolve ``specifier`` relative to ``base_directory``.

    Raises:
        ResolutionError: If the specifier is empty, the base directory does
            not exist, or the module loader cannot locate the module.
    """
    logger.debug(f"Resolving plugin {specifier}")

    if not specifier:
        raise ResolutionError(specifier, base_directory, "specifier is empty")
    if not Path(base_directory).is_dir():
        raise ResolutionError(
            specifier, base_directory, f"base directory {base_directory} does not exist"
        )

    try:
        resolved = module_loader.resolve(specifier, Path(base_directory))
    except Exception as e:
        raise ResolutionError(specifier, base_directory, str(e)) from e

    if not resolved:
        raise ResolutionError(specifier, base_directory)

    resolved = Path(resolved)
    logger.debug(f"Resolved plugin path to {resolved}")
    return resolved
