"""Loader: bucket resolution, file inclusion and import-hook lifecycle."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import ClassVar

from bucketload.config import DEFAULT_EXTENSION, DEFAULT_INDEX_NAME, Config
from bucketload.errors import ConfigError
from bucketload.hooks import HookAdapter, MetaPathHook
from bucketload.include import include_once
from bucketload.registry.buckets import BucketRegistry
from bucketload.registry.ledger import LoadLedger
from bucketload.registry.manifest import load_manifest, parse_buckets
from bucketload.registry.resolver import claims_namespace, module_name_for, resolve
from bucketload.registry.types import Descriptor, mode_label

logger = logging.getLogger(__name__)

__all__ = ["Loader"]


class Loader:
    """Resolves namespaces against registered buckets and loads the files.

    A Loader is an ordinary object owned by its caller::

        loader = Loader()
        loader.register_bucket("Acme\\\\", "/lib/acme")
        loader.register()          # installs the import hook
        import Acme.Utils          # loads /lib/acme/Utils.py

    :meth:`boot` hands out a lazily created process default instance for
    callers that want a shared one.
    """

    _default: ClassVar[Loader | None] = None

    def __init__(self, config: Config | None = None, hook: HookAdapter | None = None) -> None:
        """Initialize the Loader.

        Args:
            config: Optional Config providing ``autoload.*`` settings and buckets.
            hook: Hook adapter used by start()/stop(). Defaults to a new MetaPathHook.

        Raises:
            ConfigError: If the configured extension or buckets are invalid.
        """
        extension = DEFAULT_EXTENSION
        index_name = DEFAULT_INDEX_NAME
        if config is not None:
            extension = config.get("autoload.extension", DEFAULT_EXTENSION)
            index_name = config.get("autoload.index_name", DEFAULT_INDEX_NAME)
        if not isinstance(extension, str) or not extension.startswith("."):
            raise ConfigError(message=f"autoload.extension must start with '.': {extension!r}")
        if not isinstance(index_name, str) or not index_name:
            raise ConfigError(message="autoload.index_name must be a non-empty string")

        self._extension: str = extension
        self._index_name: str = index_name
        self._config = config
        self._buckets = BucketRegistry()
        self._ledger = LoadLedger()
        self._hook: HookAdapter = hook if hook is not None else MetaPathHook()
        self._registered = False

        if config is not None:
            base_dir = config.source.parent if config.source is not None else None
            for prefix, root in parse_buckets(config.get("autoload.buckets"), base_dir=base_dir):
                self.register_bucket(prefix, root)

    # ----- Construction -----

    @classmethod
    def boot(cls) -> Loader:
        """Return the process default Loader, creating it on first call."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    @classmethod
    def reset_default(cls) -> None:
        """Forget the process default Loader, detaching its hook first."""
        if cls._default is not None:
            cls._default.stop()
        cls._default = None

    @classmethod
    def from_config(cls, config: Config, hook: HookAdapter | None = None) -> Loader:
        return cls(config=config, hook=hook)

    @classmethod
    def from_yaml(cls, config_path: str | Path, hook: HookAdapter | None = None) -> Loader:
        """Build a Loader from a YAML config file with an ``autoload`` section."""
        return cls(config=Config.from_yaml(config_path), hook=hook)

    # ----- Buckets -----

    def register_bucket(self, prefix: str, root: str | Path) -> None:
        """Map a namespace prefix to a root directory (last write wins)."""
        self._buckets.register(prefix, str(root))

    def load_manifest(self, manifest_path: str | Path) -> int:
        """Register every bucket listed in a YAML manifest.

        Returns:
            Number of bucket entries applied.

        Raises:
            ConfigNotFoundError: If the manifest does not exist.
            ConfigError: If the manifest is malformed.
        """
        buckets = load_manifest(manifest_path)
        for prefix, root in buckets:
            self.register_bucket(prefix, root)
        return len(buckets)

    # ----- Resolution and loading -----

    def resolve(self, namespace: str, is_import: bool = False) -> Descriptor | None:
        """Resolve a namespace without loading it. Returns None when unmatched."""
        descriptor = self._resolve(namespace, is_import)
        return descriptor or None

    def _resolve(self, namespace: str, is_import: bool) -> Descriptor:
        return resolve(
            self._buckets,
            namespace,
            is_import,
            extension=self._extension,
            index_name=self._index_name,
        )

    def autoload_resolve(self, namespace: str, is_import: bool = False) -> bool:
        """Resolve a namespace and include the file it maps to.

        This is the callback installed on the import hook.

        Returns:
            True if a file was resolved and included, False otherwise.

        Raises:
            ModuleLoadError: If the resolved file raises while executing.
        """
        descriptor = self._resolve(namespace, is_import)
        if descriptor.name:
            return bool(self.include_file(descriptor, is_import))
        return False

    def include_file(self, descriptor: Descriptor | None, is_import: bool = True) -> bool:
        """Load the file a descriptor points at and record it in the ledger.

        The file body runs at most once per physical path; later calls for
        the same path still return True and overwrite the ledger entry with
        the current mode.

        Returns:
            False, with no side effect, if the descriptor is None or its path
            is not an existing regular file. True otherwise.

        Raises:
            ModuleLoadError: If the file raises while executing.
        """
        if descriptor is None or not descriptor.path or not os.path.isfile(descriptor.path):
            logger.debug("Nothing to include for %r", descriptor)
            return False

        module_name = module_name_for(descriptor.namespace) or None
        is_index = descriptor.name == self._index_name + self._extension
        module = include_once(descriptor.path, module_name, package=is_index)
        if module_name is not None and module_name not in sys.modules:
            sys.modules[module_name] = module

        self._ledger.record(descriptor, mode_label(is_import))
        return True

    def import_(self, target: str) -> bool:
        """Include a package by namespace, falling back to its index file."""
        return self.autoload_resolve(target, is_import=True)

    import_package = import_

    def claims_namespace(self, namespace: str) -> bool:
        """Whether ``namespace`` should exist as a package of bucket modules."""
        return claims_namespace(self._buckets, namespace)

    # ----- Hook lifecycle -----

    def register(self, auto_start: bool | None = None) -> None:
        """Register the loader once, starting the hook if ``auto_start``.

        ``auto_start`` defaults to the ``autoload.auto_start`` setting, which
        itself defaults to True. A second call only logs a warning;
        ``auto_start`` is not consulted then.
        """
        if self._registered:
            logger.warning("Loader is already registered")
            return

        if auto_start is None:
            auto_start = True if self._config is None else bool(self._config.get("autoload.auto_start", True))
        if auto_start:
            self.start()

        self._registered = True

    def start(self) -> bool:
        """Install :meth:`autoload_resolve` on the hook adapter."""
        return self._hook.install(self.autoload_resolve, claims=self.claims_namespace)

    def stop(self) -> bool:
        """Uninstall :meth:`autoload_resolve`. Does not reset registration."""
        return self._hook.uninstall(self.autoload_resolve)

    # ----- Introspection -----

    @property
    def buckets(self) -> BucketRegistry:
        return self._buckets

    @property
    def ledger(self) -> LoadLedger:
        return self._ledger

    @property
    def hook(self) -> HookAdapter:
        return self._hook

    @property
    def is_registered(self) -> bool:
        return self._registered

    @property
    def is_started(self) -> bool:
        return self._hook.is_installed(self.autoload_resolve)

    @property
    def extension(self) -> str:
        return self._extension

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def config(self) -> Config | None:
        return self._config

    @property
    def loaded_files(self) -> dict[str, tuple[Descriptor, str]]:
        """Snapshot of the ledger as ``{path: (descriptor, mode)}``."""
        return self._ledger.as_dict()
