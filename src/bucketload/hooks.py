"""Import-system hook adapter.

The interpreter asks every finder on ``sys.meta_path`` for a module it has
not loaded yet. :class:`MetaPathHook` places a single :class:`AutoloadFinder`
at the end of that chain and forwards each request, as a backslash-separated
namespace, to the callbacks installed on it::

    hook = MetaPathHook()
    hook.install(loader.autoload_resolve, claims=loader.claims_namespace)
    import Acme.Utils  # -> loader.autoload_resolve("Acme\\Utils")
"""

from __future__ import annotations

import abc
import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys
from types import ModuleType
from typing import Any, Callable, Sequence

from bucketload.registry.resolver import namespace_for

logger = logging.getLogger(__name__)

__all__ = ["HookAdapter", "MetaPathHook", "AutoloadFinder", "SymbolCallback", "ClaimsCallback"]

SymbolCallback = Callable[[str], bool]
ClaimsCallback = Callable[[str], bool]


class HookAdapter(abc.ABC):
    """Registration interface for deferred symbol resolution."""

    @abc.abstractmethod
    def install(self, callback: SymbolCallback, claims: ClaimsCallback | None = None) -> bool:
        """Add ``callback`` to the resolution chain. Returns success."""

    @abc.abstractmethod
    def uninstall(self, callback: SymbolCallback) -> bool:
        """Remove ``callback`` from the chain. Returns False if it was absent."""

    @abc.abstractmethod
    def is_installed(self, callback: SymbolCallback) -> bool: ...


class _LoadedModuleLoader(importlib.abc.Loader):
    """Hands an already-executed module back to the import system.

    The import machinery overwrites ``__spec__`` with the finder's spec;
    exec_module puts back the spec the module was executed under.
    """

    def __init__(self, module: ModuleType) -> None:
        self._module = module
        self._original_spec = getattr(module, "__spec__", None)

    def create_module(self, spec: importlib.machinery.ModuleSpec) -> ModuleType:
        return self._module

    def exec_module(self, module: ModuleType) -> None:
        if self._original_spec is not None:
            module.__spec__ = self._original_spec


class AutoloadFinder(importlib.abc.MetaPathFinder):
    """``sys.meta_path`` entry that consults the callbacks of one hook."""

    def __init__(self, hook: MetaPathHook) -> None:
        self._hook = hook

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> importlib.machinery.ModuleSpec | None:
        symbol = namespace_for(fullname)
        entries = self._hook.entries()

        for callback, _ in entries:
            if not callback(symbol):
                continue
            # Left in sys.modules, the module would be re-executed from its own __spec__.
            module = sys.modules.pop(fullname, None)
            if module is None:
                logger.debug("Callback loaded '%s' but no module named '%s' appeared", symbol, fullname)
                continue
            origin = getattr(module, "__file__", None)
            spec = importlib.util.spec_from_loader(
                fullname,
                _LoadedModuleLoader(module),
                origin=origin,
                is_package=hasattr(module, "__path__"),
            )
            if spec is not None and hasattr(module, "__path__"):
                spec.submodule_search_locations = list(module.__path__)
            return spec

        for _, claims in entries:
            if claims is not None and claims(symbol):
                logger.debug("Providing namespace package '%s'", fullname)
                # Empty __path__: children are found through the buckets, never sys.path finders.
                return importlib.machinery.ModuleSpec(fullname, None, is_package=True)

        return None


class MetaPathHook(HookAdapter):
    """Hook adapter backed by ``sys.meta_path``.

    The finder is appended after the interpreter's own finders, so regular
    ``sys.path`` modules always take precedence over bucket modules.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[SymbolCallback, ClaimsCallback | None]] = []
        self._finder = AutoloadFinder(self)

    @property
    def finder(self) -> AutoloadFinder:
        return self._finder

    def entries(self) -> list[tuple[SymbolCallback, ClaimsCallback | None]]:
        return list(self._entries)

    def _index(self, callback: SymbolCallback) -> int:
        for i, (cb, _) in enumerate(self._entries):
            if cb == callback:
                return i
        return -1

    def is_installed(self, callback: SymbolCallback) -> bool:
        return self._index(callback) >= 0

    @property
    def is_active(self) -> bool:
        """Whether the finder currently sits on ``sys.meta_path``."""
        return any(f is self._finder for f in sys.meta_path)

    def install(self, callback: SymbolCallback, claims: ClaimsCallback | None = None) -> bool:
        if not callable(callback):
            logger.warning("Refusing to install non-callable hook %r", callback)
            return False
        if self.is_installed(callback):
            return True

        self._entries.append((callback, claims))
        if not self.is_active:
            sys.meta_path.append(self._finder)
        logger.info("Installed autoload hook %s", _describe(callback))
        return True

    def uninstall(self, callback: SymbolCallback) -> bool:
        idx = self._index(callback)
        if idx < 0:
            return False

        del self._entries[idx]
        if not self._entries:
            sys.meta_path[:] = [f for f in sys.meta_path if f is not self._finder]
        logger.info("Uninstalled autoload hook %s", _describe(callback))
        return True


def _describe(callback: Any) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
