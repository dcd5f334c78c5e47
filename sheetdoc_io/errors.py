"""Exceptions raised while turning worksheets into documents."""

from __future__ import annotations

from typing import Optional


class SheetDocError(Exception):
    """Base error for the conversion engine.

    Carries the source coordinates (zero-based) when they are known so callers
    can point users at the offending cell.
    """

    def __init__(
        self,
        message: str,
        *,
        sheet: Optional[str] = None,
        row: Optional[int] = None,
        col: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.sheet = sheet
        self.row = row
        self.col = col

    def __str__(self) -> str:
        return self.message


class SchemaError(SheetDocError):
    """Header row cannot be turned into field descriptors."""


class ReferenceCycleError(SchemaError):
    """Reference fields form a cycle between sheets."""


class SheetNotFoundError(SheetDocError, KeyError):
    """Requested worksheet does not exist in the workbook."""


class CellValueError(SheetDocError, ValueError):
    """Cell content cannot be coerced or placed into the document."""


class ReferenceResolutionError(SheetDocError):
    """Cell could not be compared against a referenced sheet."""


class HookError(SheetDocError):
    """Raised by conversion hooks to reject a cell."""


def location(sheet: Optional[str], row: Optional[int], col: Optional[int]) -> str:
    """Render coordinates the way every error message reports them."""

    return f"{sheet},{row},{col}"
