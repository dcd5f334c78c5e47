"""Cross-sheet reference resolution."""

# Module responsibilities:
# - Match the current row against documents already read from another sheet.
# - Support explicit ``field=path`` filters and implicit cell-value equality.

from __future__ import annotations

from typing import Any, List

from .documents import lookup_path
from .errors import ReferenceResolutionError, location
from .schema import Document, FieldDescriptor, SheetValueCache
from .workbook import Cell

_ABSENT = object()


def _deep_equal(left: Any, right: Any) -> bool:
    """Structural equality that also requires identical runtime types.

    ``1`` and ``1.0`` differ, as do ``True`` and ``1``. A missing value is
    ``None`` on both sides, so missing equals missing.
    """

    if type(left) is not type(right):
        return False
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(_deep_equal(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(_deep_equal(a, b) for a, b in zip(left, right))
    return left == right


def _cell_matches(candidate: Any, cell: Cell, descriptor: FieldDescriptor, row: int) -> bool:
    # bool is an int subclass but never produced by int64 fields
    if isinstance(candidate, bool):
        return False
    try:
        if isinstance(candidate, int):
            return cell.as_int() == candidate
        if isinstance(candidate, float):
            return cell.as_float() == candidate
    except ValueError as exc:
        raise ReferenceResolutionError(
            f"{descriptor.key} value {cell.text!r} cannot be compared with "
            f"{descriptor.ref_sheet} on {location(descriptor.sheet, row, descriptor.col)}",
            sheet=descriptor.sheet,
            row=row,
            col=descriptor.col,
        ) from exc
    if isinstance(candidate, str):
        return cell.text == candidate
    return False


def resolve_reference(
    descriptor: FieldDescriptor,
    cell: Cell,
    cache: SheetValueCache,
    document: Document,
    row: int,
) -> List[Document]:
    """Return every document of the referenced sheet matching the current row.

    Args:
        descriptor: The ``ref`` field; ``args[0]`` names the sheet and
            ``args[1]`` is ``field`` or ``field=path``.
        cell: The current row's cell for this column.
        cache: Documents already materialized per sheet.
        document: The current row's document assembled so far.
        row: Zero-based row index, used for diagnostics.

    Returns:
        Matching documents in the referenced sheet's row order; possibly empty.

    Raises:
        ReferenceResolutionError: When the cell cannot be read as the number a
            candidate field holds.
    """

    field_name, sep, path = descriptor.ref_filter.partition("=")
    field_name = field_name.strip()
    candidates = cache.get(descriptor.ref_sheet, ())

    if sep:
        expected = lookup_path(document, path.strip())
        return [candidate for candidate in candidates if _deep_equal(candidate.get(field_name), expected)]

    matches: List[Document] = []
    for candidate in candidates:
        value = candidate.get(field_name, _ABSENT)
        if value is _ABSENT:
            continue
        if _cell_matches(value, cell, descriptor, row):
            matches.append(candidate)
    return matches
