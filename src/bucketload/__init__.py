"""bucketload - namespace-to-file resolution and on-demand module loading."""

from __future__ import annotations

# Core
from bucketload.loader import Loader

# Registry
from bucketload.registry import BucketRegistry, Descriptor, LoadLedger, LoadRecord, resolve
from bucketload.registry.types import IMPORT_MODE, NAMESPACE_MODE

# Hooks
from bucketload.hooks import AutoloadFinder, HookAdapter, MetaPathHook

# Config
from bucketload.config import Config

# Errors
from bucketload.errors import (
    AutoloadError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidInputError,
    ModuleLoadError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Loader",
    # Registry
    "BucketRegistry",
    "Descriptor",
    "LoadLedger",
    "LoadRecord",
    "resolve",
    "IMPORT_MODE",
    "NAMESPACE_MODE",
    # Hooks
    "HookAdapter",
    "MetaPathHook",
    "AutoloadFinder",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "AutoloadError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidInputError",
    "ModuleLoadError",
]
