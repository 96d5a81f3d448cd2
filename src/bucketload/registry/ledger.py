"""Load ledger: which files were included, with which descriptor and mode."""

from __future__ import annotations

from typing import Iterator

from bucketload.registry.types import Descriptor, LoadRecord

__all__ = ["LoadLedger"]


class LoadLedger:
    """Path-keyed record of included files.

    Every successful include overwrites the entry for its path, so the
    ledger always reflects the most recent call even when the file body was
    not executed again.
    """

    def __init__(self) -> None:
        self._records: dict[str, LoadRecord] = {}

    def record(self, descriptor: Descriptor, mode: str) -> LoadRecord:
        entry = LoadRecord(descriptor=descriptor, mode=mode)
        self._records[descriptor.path] = entry
        return entry

    def get(self, path: str) -> LoadRecord | None:
        return self._records.get(path)

    def items(self) -> list[tuple[str, LoadRecord]]:
        return list(self._records.items())

    @property
    def paths(self) -> list[str]:
        return list(self._records)

    def records_for(self, mode: str) -> list[LoadRecord]:
        """Return the records whose latest include used ``mode``."""
        return [r for r in self._records.values() if r.mode == mode]

    def as_dict(self) -> dict[str, tuple[Descriptor, str]]:
        return {path: record.as_tuple() for path, record in self._records.items()}

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self._records

    def __len__(self) -> int:
        return len(self._records)
