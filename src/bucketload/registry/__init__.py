"""bucketload registry: buckets, resolution and the load ledger.

Usage::

    from bucketload.registry import BucketRegistry, resolve

    buckets = BucketRegistry()
    buckets.register("Acme\\\\", "/lib/acme")
    descriptor = resolve(buckets, "Acme\\\\Utils")
"""

from __future__ import annotations

from bucketload.registry.buckets import BucketRegistry
from bucketload.registry.ledger import LoadLedger
from bucketload.registry.manifest import BucketEntry, BucketManifest, load_manifest, parse_buckets
from bucketload.registry.resolver import claims_namespace, module_name_for, namespace_for, resolve
from bucketload.registry.types import IMPORT_MODE, NAMESPACE_MODE, Descriptor, LoadRecord, mode_label

__all__ = [
    "BucketEntry",
    "BucketManifest",
    "BucketRegistry",
    "Descriptor",
    "IMPORT_MODE",
    "LoadLedger",
    "LoadRecord",
    "NAMESPACE_MODE",
    "claims_namespace",
    "load_manifest",
    "mode_label",
    "module_name_for",
    "namespace_for",
    "parse_buckets",
    "resolve",
]
