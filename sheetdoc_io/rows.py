"""Materialization of a single data row into a document."""

from __future__ import annotations

from typing import Sequence

from .coerce import CellCoercer
from .documents import assign_path
from .errors import CellValueError, location
from .refs import resolve_reference
from .schema import Document, FieldDescriptor, SheetValueCache
from .workbook import Sheet


def materialize_row(
    sheet: Sheet,
    fields: Sequence[FieldDescriptor],
    cache: SheetValueCache,
    row: int,
    coercer: CellCoercer,
) -> Document:
    """Build the document for ``row`` of ``sheet``.

    Fields are processed in column order so explicit reference filters can
    see every value assembled to their left. The first failing field aborts
    the row.

    Raises:
        CellValueError: Required value missing, unparseable value, or a key
            path crossing a non-document value.
        ReferenceResolutionError: Reference comparison failed.
    """

    document: Document = {}
    for descriptor in fields:
        cell = sheet.cell(row, descriptor.col)
        if descriptor.is_ref:
            value = resolve_reference(descriptor, cell, cache, document, row)
        elif not cell.text:
            if descriptor.required:
                raise CellValueError(
                    f"{descriptor.key} value is empty on {location(sheet.name, row, descriptor.col)}",
                    sheet=sheet.name,
                    row=row,
                    col=descriptor.col,
                )
            continue
        else:
            value = coercer.coerce(descriptor, cell, row)

        try:
            assign_path(document, descriptor.path, value)
        except CellValueError as exc:
            raise CellValueError(
                f"{exc.message} on {location(sheet.name, row, descriptor.col)}",
                sheet=sheet.name,
                row=row,
                col=descriptor.col,
            ) from exc
    return document
