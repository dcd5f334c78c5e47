"""Tests for the built-in file and time hooks."""

from __future__ import annotations

import pytest

from sheetdoc.services.hooks import build_hooks, epoch_time_hook, iso_time_hook
from sheetdoc_io import HookError, SheetReader
from sheetdoc_io.schema import FieldDescriptor, FieldType
from sheetdoc_io.workbook import Cell


def _time_field() -> FieldDescriptor:
    return FieldDescriptor(key="at", type=FieldType.TIME, sheet="events", row=1, col=1)


@pytest.mark.parametrize("hook", [iso_time_hook, epoch_time_hook])
def test_time_hooks_report_field_location(hook) -> None:
    with pytest.raises(HookError) as excinfo:
        hook(_time_field(), Cell("soon"))

    assert "at value 'soon' is not a date/time" in str(excinfo.value)
    assert (excinfo.value.sheet, excinfo.value.col) == ("events", 1)


def test_default_hooks_format_times_as_iso() -> None:
    hooks = build_hooks()

    assert hooks.on_time is iso_time_hook
    assert hooks.on_file is None


def test_keep_format_installs_no_time_hook() -> None:
    assert build_hooks(time_format="keep").on_time is None


def test_time_hook_failure_carries_row(make_workbook) -> None:
    path = make_workbook({"events": [["t"], ["id,int64", "at,time"], [1, "2024-05-10T09:15:00"], [2, "soon"]]})

    with pytest.raises(HookError) as excinfo:
        SheetReader.open(path, hooks=build_hooks(time_format="iso")).read("events")

    assert (excinfo.value.sheet, excinfo.value.row, excinfo.value.col) == ("events", 3, 1)


def test_missing_file_failure_carries_row(tmp_path, make_workbook) -> None:
    root = tmp_path / "assets"
    root.mkdir()
    (root / "a.png").write_bytes(b"png")
    path = make_workbook({"pics": [["t"], ["id,int64", "src,file"], [1, "a.png"], [2, "b.png"]]})

    with pytest.raises(HookError, match="not found under") as excinfo:
        SheetReader.open(path, hooks=build_hooks(file_root=root)).read("pics")

    assert (excinfo.value.sheet, excinfo.value.row, excinfo.value.col) == ("pics", 3, 1)


def test_file_outside_root_is_rejected(tmp_path, make_workbook) -> None:
    root = tmp_path / "assets"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("x", encoding="utf-8")
    path = make_workbook({"pics": [["t"], ["id,int64", "src,file"], [1, "../secret.txt"]]})

    with pytest.raises(HookError, match="escapes"):
        SheetReader.open(path, hooks=build_hooks(file_root=root)).read("pics")
