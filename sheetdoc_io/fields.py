"""Header row parsing into field descriptors."""

# Module responsibilities:
# - Parse the ``key[:o],type[,args...]`` mini-language of a header cell.
# - Validate a whole header row (duplicate keys, reference arguments).

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .errors import SchemaError, location
from .schema import FieldDescriptor, FieldType, HeaderSchema

OPTIONAL_MODIFIERS = {"o", "optional"}


def parse_field(
    text: str,
    sheet: str,
    row: int,
    col: int,
    *,
    allow_custom: bool = False,
) -> Optional[FieldDescriptor]:
    """Parse one header cell.

    Args:
        text: Raw cell text.
        sheet: Sheet name, used for diagnostics.
        row: Zero-based header row.
        col: Zero-based column.
        allow_custom: Accept type tags outside :class:`FieldType`.

    Returns:
        The descriptor, or ``None`` for a blank cell.

    Raises:
        SchemaError: When the cell is not a valid field specification.
    """

    value = text.strip()
    if not value:
        return None

    where = location(sheet, row, col)
    parts = value.split(",")
    if len(parts) < 2:
        raise SchemaError(
            f"{value} is invalid on {where}: expected key,type",
            sheet=sheet,
            row=row,
            col=col,
        )

    key, _, modifier = parts[0].partition(":")
    if not key:
        raise SchemaError(
            f"{value} is invalid by key empty on {where}", sheet=sheet, row=row, col=col
        )

    tag = parts[1]
    field_type = FieldType.lookup(tag)
    if field_type is None and not (allow_custom and tag):
        raise SchemaError(
            f"{value} is invalid by type not supported on {where}",
            sheet=sheet,
            row=row,
            col=col,
        )

    args = tuple(parts[2:])
    if field_type is FieldType.REF and len(args) < 2:
        raise SchemaError(
            f"{value} is invalid on {where}: ref needs a sheet and a field",
            sheet=sheet,
            row=row,
            col=col,
        )

    return FieldDescriptor(
        key=key,
        type=field_type if field_type is not None else tag,
        required=modifier.lower() not in OPTIONAL_MODIFIERS,
        args=args,
        sheet=sheet,
        row=row,
        col=col,
    )


def parse_header_cells(
    texts: Iterable[str],
    sheet: str,
    row: int,
    *,
    allow_custom: bool = False,
) -> HeaderSchema:
    """Parse every cell of a header row, in column order."""

    fields: List[FieldDescriptor] = []
    seen: Dict[str, FieldDescriptor] = {}
    for col, text in enumerate(texts):
        descriptor = parse_field(text, sheet, row, col, allow_custom=allow_custom)
        if descriptor is None:
            continue
        having = seen.get(descriptor.key)
        if having is not None:
            raise SchemaError(
                f"{text.strip()} is duplicate on {location(sheet, row, col)}"
                f"=>{location(sheet, having.row, having.col)}",
                sheet=sheet,
                row=row,
                col=col,
            )
        seen[descriptor.key] = descriptor
        fields.append(descriptor)

    refs = tuple(descriptor for descriptor in fields if descriptor.is_ref)
    return HeaderSchema(fields=tuple(fields), refs=refs)
