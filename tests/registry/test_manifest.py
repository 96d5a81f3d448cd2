"""Tests for bucket manifest loading: load_manifest() and parse_buckets()."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from bucketload.errors import ConfigError, ConfigNotFoundError
from bucketload.registry.manifest import BucketManifest, load_manifest, parse_buckets


# === parse_buckets() ===


class TestParseBuckets:
    def test_none_is_empty(self) -> None:
        assert parse_buckets(None) == []

    def test_valid_entries_keep_order(self) -> None:
        raw = [{"prefix": "Acme\\", "root": "/lib/acme"}, {"prefix": "Shop\\", "root": "/lib/shop"}]
        assert parse_buckets(raw) == [("Acme\\", "/lib/acme"), ("Shop\\", "/lib/shop")]

    def test_relative_root_anchored(self, tmp_path: Path) -> None:
        result = parse_buckets([{"prefix": "Acme\\", "root": "lib/acme"}], base_dir=tmp_path)
        assert result == [("Acme\\", str(tmp_path / "lib/acme"))]

    def test_absolute_root_not_anchored(self, tmp_path: Path) -> None:
        result = parse_buckets([{"prefix": "Acme\\", "root": "/abs/acme"}], base_dir=tmp_path)
        assert result == [("Acme\\", "/abs/acme")]

    def test_missing_root_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parse_buckets([{"prefix": "Acme\\"}])
        assert exc_info.value.details["errors"]

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigError):
            parse_buckets([{"prefix": "Acme\\", "root": "/x", "priority": 1}])

    def test_not_a_list_raises(self) -> None:
        with pytest.raises(ConfigError):
            parse_buckets({"prefix": "Acme\\", "root": "/x"})


# === load_manifest() ===


class TestLoadManifest:
    def test_valid_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "buckets.yaml"
        path.write_text(yaml.dump({"buckets": [{"prefix": "Acme\\", "root": "lib/acme"}]}))
        assert load_manifest(path) == [("Acme\\", str(tmp_path.resolve() / "lib/acme"))]

    def test_nonexistent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_manifest(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("{{invalid yaml:")
        with pytest.raises(ConfigError):
            load_manifest(path)

    def test_missing_buckets_key_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "other.yaml"
        path.write_text(yaml.dump({"roots": []}))
        with pytest.raises(ConfigError, match="buckets"):
            load_manifest(path)

    def test_empty_file_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_manifest(path) == []

    def test_model_allows_extra_top_level_keys(self) -> None:
        manifest = BucketManifest.model_validate({"buckets": [], "version": 1})
        assert manifest.buckets == []
