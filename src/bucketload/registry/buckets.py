"""Bucket registry: namespace prefix to root directory mapping."""

from __future__ import annotations

import logging
from typing import Iterator

from bucketload.errors import InvalidInputError

logger = logging.getLogger(__name__)

__all__ = ["BucketRegistry"]


class BucketRegistry:
    """Insertion-ordered mapping of namespace prefixes to root directories.

    Registering an existing prefix replaces its root but keeps its original
    position in the lookup order. Roots are not checked for existence.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, str] = {}

    def register(self, prefix: str, root: str) -> None:
        """Register (or overwrite) the root directory for a prefix."""
        if not isinstance(prefix, str):
            raise InvalidInputError(message=f"Bucket prefix must be a string, got {type(prefix).__name__}")
        previous = self._buckets.get(prefix)
        self._buckets[prefix] = str(root)
        if previous is not None and previous != str(root):
            logger.debug("Bucket '%s' root changed: %s -> %s", prefix, previous, root)
        else:
            logger.debug("Bucket '%s' registered at %s", prefix, root)

    def get(self, prefix: str) -> str | None:
        return self._buckets.get(prefix)

    def items(self) -> list[tuple[str, str]]:
        """Snapshot of (prefix, root) pairs in registration order."""
        return list(self._buckets.items())

    @property
    def prefixes(self) -> list[str]:
        return list(self._buckets)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items())

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return f"BucketRegistry({self._buckets!r})"
