"""Shared test fixtures for the bucketload test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

from bucketload import include
from bucketload.hooks import ClaimsCallback, HookAdapter, SymbolCallback
from bucketload.loader import Loader

# Top-level module names the tests are allowed to create.
_TEST_ROOTS = {"Acme", "App", "Shop", "Vendor"}


def _is_test_module(name: str) -> bool:
    return name.split(".", 1)[0] in _TEST_ROOTS or name.startswith("bucketload_ext_")


def write_source(root: Path, relative: str, body: str = "") -> Path:
    """Write ``body`` to ``root/relative``, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path


def counting_body(marker: Path, extra: str = "") -> str:
    """Module source that appends one ``x`` to ``marker`` every time it runs."""
    return (
        "from pathlib import Path\n"
        f"_marker = Path({str(marker)!r})\n"
        "_marker.write_text((_marker.read_text() if _marker.exists() else '') + 'x')\n"
        f"{extra}"
    )


class RecordingHook(HookAdapter):
    """Hook adapter that records calls instead of touching sys.meta_path."""

    def __init__(self, install_result: bool = True, uninstall_result: bool = True) -> None:
        self.installed: list[tuple[SymbolCallback, ClaimsCallback | None]] = []
        self.install_calls = 0
        self.uninstall_calls = 0
        self._install_result = install_result
        self._uninstall_result = uninstall_result

    def install(self, callback: SymbolCallback, claims: ClaimsCallback | None = None) -> bool:
        self.install_calls += 1
        if self._install_result and not self.is_installed(callback):
            self.installed.append((callback, claims))
        return self._install_result

    def uninstall(self, callback: SymbolCallback) -> bool:
        self.uninstall_calls += 1
        before = len(self.installed)
        self.installed = [(cb, cl) for cb, cl in self.installed if cb != callback]
        return self._uninstall_result and len(self.installed) < before

    def is_installed(self, callback: SymbolCallback) -> bool:
        return any(cb == callback for cb, _ in self.installed)


@pytest.fixture(autouse=True)
def _isolate_import_state() -> Any:
    """Restore sys.meta_path, test modules and the include table after each test."""
    saved_meta_path = list(sys.meta_path)
    saved_included = dict(include._included)
    yield
    Loader.reset_default()
    sys.meta_path[:] = saved_meta_path
    for name in [n for n in sys.modules if _is_test_module(n)]:
        del sys.modules[name]
    include._included.clear()
    include._included.update(saved_included)


@pytest.fixture
def recording_hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture
def lib_root(tmp_path: Path) -> Path:
    """An empty bucket root directory."""
    root = tmp_path / "lib" / "acme"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def source_writer() -> Callable[..., Path]:
    return write_source


@pytest.fixture
def counting_source() -> Callable[..., str]:
    return counting_body


@pytest.fixture
def hook_factory() -> Callable[..., RecordingHook]:
    return RecordingHook
