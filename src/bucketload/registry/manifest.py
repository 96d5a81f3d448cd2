"""Bucket manifest loading from YAML files and config sections."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from bucketload.errors import ConfigError, ConfigNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "BucketEntry",
    "BucketManifest",
    "load_manifest",
    "parse_buckets",
]


class BucketEntry(BaseModel):
    """One ``prefix -> root`` mapping."""

    model_config = ConfigDict(extra="forbid")

    prefix: str
    root: str


class BucketManifest(BaseModel):
    """Top-level manifest document: ``{buckets: [...]}``."""

    model_config = ConfigDict(extra="allow")

    buckets: list[BucketEntry] = []


def _anchor_root(root: str, base_dir: Path | None) -> str:
    if base_dir is None or Path(root).is_absolute():
        return root
    return str(base_dir / root)


def parse_buckets(raw: Any, base_dir: Path | None = None) -> list[tuple[str, str]]:
    """Validate a raw ``buckets`` list and return (prefix, root) pairs.

    Relative roots are anchored at ``base_dir`` when one is given.

    Raises:
        ConfigError: If the list or any entry is malformed.
    """
    if raw is None:
        return []
    try:
        manifest = BucketManifest.model_validate({"buckets": raw})
    except ValidationError as e:
        raise ConfigError(
            message=f"Invalid bucket definitions: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
    return [(entry.prefix, _anchor_root(entry.root, base_dir)) for entry in manifest.buckets]


def load_manifest(manifest_path: str | Path) -> list[tuple[str, str]]:
    """Load a bucket manifest YAML file.

    Raises ConfigNotFoundError if the file does not exist (the manifest is
    explicitly requested) and ConfigError if it is not a valid manifest.
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.exists():
        raise ConfigNotFoundError(config_path=str(manifest_path))

    content = manifest_path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(message=f"Invalid YAML in bucket manifest: {manifest_path}") from e

    if parsed is None:
        logger.warning("Bucket manifest %s is empty", manifest_path)
        return []
    if not isinstance(parsed, dict) or "buckets" not in parsed:
        raise ConfigError(message="Bucket manifest must contain a 'buckets' list")

    buckets = parse_buckets(parsed["buckets"], base_dir=manifest_path.resolve().parent)
    logger.debug("Loaded %d bucket(s) from %s", len(buckets), manifest_path)
    return buckets
