"""Execute source files as modules, at most once per physical path."""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import os
import sys
from pathlib import Path
from types import CodeType, ModuleType

from bucketload.errors import ModuleLoadError

logger = logging.getLogger(__name__)

__all__ = ["include_once", "is_included", "included_paths", "default_module_name"]

# Interpreter-wide, like sys.modules: real path -> loaded module.
_included: dict[str, ModuleType] = {}


class _UncachedSourceLoader(importlib.machinery.SourceFileLoader):
    """Compiles straight from source, never reading or writing ``__pycache__``."""

    def get_code(self, fullname: str | None) -> CodeType:
        return self.source_to_code(self.get_data(self.path), self.path)


def _real(path: str | Path) -> str:
    return os.path.realpath(path)


def _adopt_submodules(module: ModuleType, previous: ModuleType, name: str) -> None:
    """Carry over child-module attributes from the module being replaced."""
    for attr, value in vars(previous).items():
        if isinstance(value, ModuleType) and sys.modules.get(f"{name}.{attr}") is value:
            setattr(module, attr, value)


def default_module_name(file_path: str | Path) -> str:
    return f"bucketload_ext_{Path(file_path).stem}"


def is_included(file_path: str | Path) -> bool:
    return _real(file_path) in _included


def included_paths() -> list[str]:
    return list(_included)


def include_once(
    file_path: str | Path,
    module_name: str | None = None,
    *,
    package: bool = False,
) -> ModuleType:
    """Execute a Python file as a module unless it was already executed.

    The module is published in ``sys.modules`` under ``module_name`` before
    its body runs, so the body may import other modules that in turn import
    it back. A repeated call for the same real path returns the module from
    the first call without running the body again.

    Raises:
        ModuleLoadError: If no import spec can be built or the body raises.
    """
    real = _real(file_path)
    existing = _included.get(real)
    if existing is not None:
        logger.debug("Already included: %s", real)
        return existing

    name = module_name or default_module_name(file_path)
    loader = _UncachedSourceLoader(name, real)
    locations: list[str] | None = [] if package else None
    spec = importlib.util.spec_from_file_location(name, real, loader=loader, submodule_search_locations=locations)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(file_path=str(file_path), reason=f"Cannot create import spec for {file_path}")
    if package:
        # spec_from_file_location fills an empty list with the file's directory.
        spec.submodule_search_locations = []

    mod = importlib.util.module_from_spec(spec)
    previous = sys.modules.get(name)
    if previous is not None:
        _adopt_submodules(mod, previous, name)
    _included[real] = mod
    sys.modules[name] = mod
    try:
        spec.loader.exec_module(mod)
    except Exception as exc:
        _included.pop(real, None)
        if previous is not None:
            sys.modules[name] = previous
        else:
            sys.modules.pop(name, None)
        logger.error("Failed to execute %s as '%s': %s", real, name, exc)
        raise ModuleLoadError(file_path=str(file_path), reason=f"Failed to import module: {exc}") from exc

    parent_name, _, child = name.rpartition(".")
    parent = sys.modules.get(parent_name) if parent_name else None
    if parent is not None:
        setattr(parent, child, mod)

    logger.debug("Included %s as '%s'", real, name)
    return mod
