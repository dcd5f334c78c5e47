"""Dot-path assembly of nested documents."""

from __future__ import annotations

from typing import Any, Sequence

from .errors import CellValueError
from .schema import Document

_MISSING = object()


def assign_path(document: Document, path: Sequence[str], value: Any) -> None:
    """Store ``value`` at ``path``, creating intermediate documents.

    Raises:
        CellValueError: When an intermediate segment holds a non-document.
    """

    parent = document
    for depth, key in enumerate(path[:-1]):
        child = parent.get(key)
        if child is None:
            child = {}
            parent[key] = child
        if not isinstance(child, dict):
            raise CellValueError(f"{'.'.join(path[: depth + 1])} is not object")
        parent = child
    parent[path[-1]] = value


def lookup_path(document: Document, path: str, default: Any = _MISSING) -> Any:
    """Return the value at dot ``path``, or ``default`` when any segment is absent."""

    target: Any = document
    for key in path.split("."):
        if not isinstance(target, dict) or key not in target:
            return None if default is _MISSING else default
        target = target[key]
    return target
