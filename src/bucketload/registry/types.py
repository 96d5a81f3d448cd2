"""Registry types: Descriptor, LoadRecord and load mode labels."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Descriptor",
    "LoadRecord",
    "IMPORT_MODE",
    "NAMESPACE_MODE",
    "mode_label",
]

IMPORT_MODE = "import"
NAMESPACE_MODE = "namespace"


def mode_label(is_import: bool) -> str:
    """Return the ledger label for a load performed in the given mode."""
    return IMPORT_MODE if is_import else NAMESPACE_MODE


@dataclass(frozen=True)
class Descriptor:
    """Result of resolving a namespace to a file.

    All fields blank means "not found"; such a descriptor is falsy.
    """

    name: str = ""
    path: str = ""
    dir_name: str = ""
    namespace: str = ""
    bucket: str = ""

    @classmethod
    def empty(cls) -> Descriptor:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.name

    def __bool__(self) -> bool:
        return bool(self.name)

    def as_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "path": self.path,
            "dir_name": self.dir_name,
            "namespace": self.namespace,
            "bucket": self.bucket,
        }


@dataclass(frozen=True)
class LoadRecord:
    """Ledger entry: the descriptor a file was last included with, and how."""

    descriptor: Descriptor
    mode: str

    def as_tuple(self) -> tuple[Descriptor, str]:
        return (self.descriptor, self.mode)
