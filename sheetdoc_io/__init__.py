"""`sheetdoc_io` turns schema-annotated worksheets into nested documents."""

# Module responsibilities:
# - Re-export the reader, descriptor types, hooks and errors as the stable API surface.

from __future__ import annotations

from .errors import (
    CellValueError,
    HookError,
    ReferenceCycleError,
    ReferenceResolutionError,
    SchemaError,
    SheetDocError,
    SheetNotFoundError,
)
from .fields import parse_field, parse_header_cells
from .frame import documents_to_frame
from .reader import SheetReader
from .schema import ConversionHooks, Document, FieldDescriptor, FieldType, HeaderSchema
from .workbook import Cell, Sheet, Workbook

__all__ = [
    "SheetReader",
    "Workbook",
    "Sheet",
    "Cell",
    "ConversionHooks",
    "Document",
    "FieldDescriptor",
    "FieldType",
    "HeaderSchema",
    "parse_field",
    "parse_header_cells",
    "documents_to_frame",
    "SheetDocError",
    "SchemaError",
    "ReferenceCycleError",
    "SheetNotFoundError",
    "CellValueError",
    "ReferenceResolutionError",
    "HookError",
]

__version__ = "0.1.0"
