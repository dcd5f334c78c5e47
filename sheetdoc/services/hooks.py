"""Ready-made conversion hooks for file and time fields."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from sheetdoc_io import Cell, ConversionHooks, FieldDescriptor, HookError
from sheetdoc_io.coerce import to_local_time

from sheetdoc.config import DEFAULT_TIME_FORMAT, TimeFormat


def file_root_hook(root: Path) -> Callable[[FieldDescriptor, Cell], str]:
    """Resolve file fields against ``root`` and require the file to exist.

    The stored value is the POSIX path relative to ``root``.
    """

    base = Path(root).resolve()

    def _hook(field: FieldDescriptor, cell: Cell) -> str:
        target = (base / cell.text).resolve()
        if not target.is_relative_to(base):
            raise HookError(
                f"{field.key} file {cell.text!r} escapes {base}",
                sheet=field.sheet,
                col=field.col,
            )
        if not target.is_file():
            raise HookError(
                f"{field.key} file {cell.text!r} not found under {base}",
                sheet=field.sheet,
                col=field.col,
            )
        return target.relative_to(base).as_posix()

    return _hook


def _local_time(field: FieldDescriptor, cell: Cell) -> datetime:
    try:
        return to_local_time(cell.as_datetime())
    except ValueError as exc:
        raise HookError(
            f"{field.key} value {cell.text!r} is not a date/time",
            sheet=field.sheet,
            col=field.col,
        ) from exc


def iso_time_hook(field: FieldDescriptor, cell: Cell) -> str:
    return _local_time(field, cell).isoformat()


def epoch_time_hook(field: FieldDescriptor, cell: Cell) -> int:
    return int(_local_time(field, cell).timestamp())


TIME_HOOKS: dict[str, Callable[[FieldDescriptor, Cell], Any]] = {
    "iso": iso_time_hook,
    "epoch": epoch_time_hook,
}


def build_hooks(*, file_root: Path | None = None, time_format: TimeFormat = DEFAULT_TIME_FORMAT) -> ConversionHooks:
    """Assemble :class:`ConversionHooks` from job options."""

    return ConversionHooks(
        on_time=TIME_HOOKS.get(time_format),
        on_file=file_root_hook(file_root) if file_root is not None else None,
    )
