"""Typed conversion of raw cells according to their field descriptor."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from .errors import CellValueError, SheetDocError, location
from .schema import ConversionHooks, FieldDescriptor, FieldType, Hook
from .workbook import Cell

Strategy = Callable[[Cell], Any]


def _fail(descriptor: FieldDescriptor, cell: Cell, row: int, reason: str) -> CellValueError:
    return CellValueError(
        f"{descriptor.key} value {cell.text!r} {reason} on "
        f"{location(descriptor.sheet, row, descriptor.col)}",
        sheet=descriptor.sheet,
        row=row,
        col=descriptor.col,
    )


def to_local_time(value: datetime) -> datetime:
    """Keep the wall-clock value and attach the host's local time zone."""

    return value.replace(tzinfo=None).astimezone()


def _coerce_int(cell: Cell) -> Any:
    return cell.as_int()


def _coerce_float(cell: Cell) -> Any:
    return cell.as_float()


def _coerce_string(cell: Cell) -> Any:
    return cell.text


def _coerce_time(cell: Cell) -> Any:
    return to_local_time(cell.as_datetime())


def _coerce_file(cell: Cell) -> Any:
    return cell.text


def _coerce_ref(cell: Cell) -> Any:
    # rows.materialize_row hands ref fields to the resolver before coercion
    raise TypeError("reference fields are resolved against the sheet cache, not coerced")


STRATEGIES: Dict[FieldType, Strategy] = {
    FieldType.INT64: _coerce_int,
    FieldType.FLOAT64: _coerce_float,
    FieldType.STRING: _coerce_string,
    FieldType.TIME: _coerce_time,
    FieldType.FILE: _coerce_file,
    FieldType.REF: _coerce_ref,
}


class CellCoercer:
    """Dispatch a cell to the conversion strategy of its descriptor's type."""

    def __init__(self, hooks: ConversionHooks | None = None) -> None:
        self.hooks = hooks or ConversionHooks()

    @property
    def allows_custom_types(self) -> bool:
        return self.hooks.on_parse is not None

    def _hook_for(self, descriptor: FieldDescriptor) -> Optional[Hook]:
        if not isinstance(descriptor.type, FieldType):
            return self.hooks.on_parse
        if descriptor.type is FieldType.TIME:
            return self.hooks.on_time
        if descriptor.type is FieldType.FILE:
            return self.hooks.on_file
        return None

    @staticmethod
    def _run_hook(hook: Hook, descriptor: FieldDescriptor, cell: Cell, row: int) -> Any:
        try:
            return hook(descriptor, cell)
        except SheetDocError as exc:
            # hooks never see the row; fill in whatever coordinates they left out
            if exc.sheet is None:
                exc.sheet = descriptor.sheet
            if exc.row is None:
                exc.row = row
            if exc.col is None:
                exc.col = descriptor.col
            raise

    def coerce(self, descriptor: FieldDescriptor, cell: Cell, row: int) -> Any:
        """Convert ``cell`` for ``descriptor``.

        Hook exceptions propagate as raised (a :class:`SheetDocError` gets
        its missing coordinates filled in); decoding failures of built-in
        types are reported as :class:`CellValueError`.
        """

        hook = self._hook_for(descriptor)
        if hook is not None:
            return self._run_hook(hook, descriptor, cell, row)
        if not isinstance(descriptor.type, FieldType):
            raise _fail(descriptor, cell, row, f"has unsupported type {descriptor.type}")

        try:
            return STRATEGIES[descriptor.type](cell)
        except (ValueError, OverflowError) as exc:
            raise _fail(descriptor, cell, row, f"is not a valid {descriptor.type.value}") from exc
