"""Module resolution and import for plugin specifiers.

``ModuleLoader`` is the capability the plugin pipeline depends on. The
default ``FileSystemModuleLoader`` resolves specifiers against the
filesystem and imports source files with ``importlib``. Tests inject a
loader that serves in-memory fixtures instead.

Resolution rules:
1. Path-like specifiers (``./x``, ``../x.py``, ``/abs/x``, ``~/x``) are
   joined to the base directory and tried as given, with a ``.py`` suffix,
   then as a package directory (``__init__.py``).
2. Dotted module names are looked up in the base directory, then each of
   its ancestors, then ``sys.path``. Packages resolve to ``__init__.py``.
   Such modules are imported under their dotted name, parent packages
   first, the way a regular ``import`` would.
"""

from __future__ import annotations

import hashlib
import importlib.machinery
import importlib.util
import os
import sys
from importlib.machinery import ModuleSpec
from pathlib import Path
from typing import Any, Protocol


class ModuleLoader(Protocol):
    """Resolves a specifier to a file and imports files as modules."""

    def resolve(self, specifier: str, base_directory: Path) -> Path:
        ...

    def import_module(self, path: Path) -> Any:
        ...


def is_path_specifier(specifier: str) -> bool:
    """True if the specifier names a filesystem path rather than a module."""
    return (
        specifier.startswith((".", "/", "~"))
        or "/" in specifier
        or os.sep in specifier
        or specifier.endswith(".py")
    )


def _module_name_for(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = path.parent.name if path.name == "__init__.py" else path.stem
    return f"_anvil_plugin_{stem}_{digest}"


class FileSystemModuleLoader:
    """Resolves specifiers on disk and imports them with importlib."""

    def __init__(self) -> None:
        # resolved file -> (dotted name, specs from the top-level package down)
        self._dotted: dict[Path, tuple[str, list[ModuleSpec]]] = {}

    def resolve(self, specifier: str, base_directory: Path) -> Path:
        if is_path_specifier(specifier):
            return self._resolve_path(specifier, base_directory)
        return self._resolve_module(specifier, base_directory)

    def _resolve_path(self, specifier: str, base_directory: Path) -> Path:
        target = base_directory / Path(specifier).expanduser()
        candidates = [
            target,
            target.with_name(target.name + ".py"),
            target / "__init__.py",
        ]
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise ModuleNotFoundError(
            f"Cannot find module '{specifier}' from '{base_directory}'"
        )

    def _resolve_module(self, specifier: str, base_directory: Path) -> Path:
        parts = specifier.split(".")
        if not all(part.isidentifier() for part in parts):
            raise ModuleNotFoundError(f"'{specifier}' is not a valid module name")

        search_path = self._search_path(base_directory)
        spec = importlib.machinery.PathFinder.find_spec(parts[0], search_path)
        chain: list[ModuleSpec] = []
        for part in parts[1:]:
            if spec is None or not spec.submodule_search_locations:
                spec = None
                break
            chain.append(spec)
            spec = importlib.machinery.PathFinder.find_spec(
                part, list(spec.submodule_search_locations)
            )

        if spec is None:
            raise ModuleNotFoundError(
                f"Cannot find module '{specifier}' from '{base_directory}'"
            )
        if not spec.origin or not Path(spec.origin).is_file():
            # Namespace packages and extension-less specs have no entry file
            raise ModuleNotFoundError(
                f"Module '{specifier}' has no source file entry point"
            )
        chain.append(spec)
        resolved = Path(spec.origin).resolve()
        self._dotted[resolved] = (specifier, chain)
        return resolved

    @staticmethod
    def _search_path(base_directory: Path) -> list[str]:
        search: list[str] = []
        for directory in [base_directory, *base_directory.parents]:
            search.append(str(directory))
        for entry in sys.path:
            entry = entry or os.getcwd()
            if entry not in search:
                search.append(entry)
        return search

    def import_module(self, path: Path) -> Any:
        """Execute the file at ``path`` as a module.

        Files resolved from a dotted name are imported under that name, with
        their parent packages imported first, so relative and absolute
        imports inside the plugin behave as in a normal import. Other files
        are kept in ``sys.modules`` under a name derived from their path, so
        a second import of the same file returns the same module.
        """
        dotted = self._dotted.get(Path(path))
        if dotted is not None:
            return self._import_dotted(*dotted)

        module_name = _module_name_for(path)
        cached = sys.modules.get(module_name)
        if cached is not None:
            return cached

        search_locations = [str(path.parent)] if path.name == "__init__.py" else None
        spec = importlib.util.spec_from_file_location(
            module_name, path, submodule_search_locations=search_locations
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"No loader available for {path}")
        return _execute(spec)

    def _import_dotted(self, specifier: str, chain: list[ModuleSpec]) -> Any:
        parts = specifier.split(".")
        parent = None
        module = None
        for index, found in enumerate(chain):
            name = ".".join(parts[: index + 1])
            module = sys.modules.get(name)
            if module is None:
                module = _execute(_named_spec(name, found))
                if parent is not None:
                    setattr(parent, parts[index], module)
            parent = module
        return module


def _named_spec(name: str, found: ModuleSpec) -> ModuleSpec:
    """Re-create a spec found by ``PathFinder`` under its full dotted name."""
    locations = found.submodule_search_locations
    if not found.origin or not Path(found.origin).is_file():
        namespace = ModuleSpec(name, None, is_package=True)
        namespace.submodule_search_locations = list(locations or [])
        return namespace
    spec = importlib.util.spec_from_file_location(
        name,
        found.origin,
        submodule_search_locations=list(locations) if locations is not None else None,
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"No loader available for {found.origin}")
    return spec


def _execute(spec: ModuleSpec) -> Any:
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        if spec.loader is not None:
            spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(spec.name, None)
        raise
    return module
