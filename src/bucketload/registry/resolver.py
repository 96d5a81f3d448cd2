"""Namespace to file resolution against a bucket registry."""

from __future__ import annotations

import logging
import os
import re
from typing import Iterable

from bucketload.config import DEFAULT_EXTENSION, DEFAULT_INDEX_NAME
from bucketload.registry.types import Descriptor

logger = logging.getLogger(__name__)

__all__ = [
    "resolve",
    "claims_namespace",
    "module_name_for",
    "namespace_for",
]

_SEPARATORS = "/\\"
_SPLIT_RE = re.compile(r"[\\/]+")


def _is_file(path: str) -> bool:
    # os.path.isfile() already maps permission and other OS errors to False.
    return bool(path) and os.path.isfile(path)


def _tail_from_last_slash(path: str) -> str:
    idx = path.rfind("/")
    return path[idx:] if idx >= 0 else path


def _build_descriptor(resolved: str, namespace: str, prefix: str) -> Descriptor:
    idx = resolved.rfind("/")
    return Descriptor(
        name=_tail_from_last_slash(resolved).lstrip("/"),
        path=resolved,
        dir_name=resolved[:idx] if idx >= 0 else "",
        namespace=namespace,
        bucket=prefix.rstrip(_SEPARATORS),
    )


def _relative_part(namespace: str, prefix: str) -> str:
    return namespace.lstrip(_SEPARATORS).replace("\\", "/")[len(prefix):]


def resolve(
    buckets: Iterable[tuple[str, str]],
    namespace: str,
    is_import: bool = False,
    *,
    extension: str = DEFAULT_EXTENSION,
    index_name: str = DEFAULT_INDEX_NAME,
) -> Descriptor:
    """Resolve a namespace to a file descriptor.

    Every bucket whose prefix the namespace starts with is tried, in
    registration order, and the scan does not stop at the first hit: the
    last bucket that yields an existing file determines the result.

    In import mode an exact ``<name><ext>`` match keeps only the part of the
    candidate from its last ``/`` onward (the directory is dropped), while a
    missing exact match falls back to ``<name>/<index_name><ext>``.

    Returns:
        The matching Descriptor, or an empty Descriptor when nothing matched.
    """
    result = Descriptor.empty()

    for prefix, root in buckets:
        if not namespace.startswith(prefix):
            continue

        candidate = root + os.sep + _relative_part(namespace, prefix)
        check_file = candidate + extension
        resolved = ""

        if is_import:
            if _is_file(check_file):
                resolved = _tail_from_last_slash(check_file)
            else:
                index_file = candidate.rstrip("/") + os.sep + index_name + extension
                if _is_file(index_file):
                    resolved = index_file
        elif _is_file(check_file):
            resolved = check_file

        if _is_file(resolved):
            result = _build_descriptor(resolved, namespace, prefix)
            logger.debug("Resolved '%s' via bucket '%s' to %s", namespace, prefix, resolved)

    if result.is_empty:
        logger.debug("No bucket resolved '%s' (import=%s)", namespace, is_import)
    return result


def claims_namespace(buckets: Iterable[tuple[str, str]], namespace: str) -> bool:
    """Return True if ``namespace`` can act as a package of bucket modules.

    A namespace is claimed when it is a bucket prefix (or a leading part of
    one), or when it names an existing directory inside a matching bucket.
    """
    wanted = "\\".join(p for p in _SPLIT_RE.split(namespace) if p)
    if not wanted:
        return False

    for prefix, root in buckets:
        head = "\\".join(p for p in _SPLIT_RE.split(prefix) if p)
        if head == wanted or head.startswith(wanted + "\\"):
            return True
        if namespace.startswith(prefix) and os.path.isdir(root + os.sep + _relative_part(namespace, prefix)):
            return True
    return False


def module_name_for(namespace: str) -> str:
    """Convert ``Acme\\Utils`` or ``Acme/Utils`` to ``Acme.Utils``."""
    return ".".join(part for part in _SPLIT_RE.split(namespace) if part)


def namespace_for(module_name: str) -> str:
    """Convert a dotted module name to a backslash-separated namespace."""
    return module_name.replace(".", "\\")
