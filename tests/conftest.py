from __future__ import annotations

import faulthandler
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

# Keep log files out of the user's home directory.
os.environ.setdefault("SHEETDOC_HOME", tempfile.mkdtemp(prefix="sheetdoc-tests-"))

SheetRows = Sequence[Sequence[Any]]
WorkbookFactory = Callable[..., Path]


def write_workbook(path: Path, sheets: Dict[str, SheetRows]) -> Path:
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def make_workbook(tmp_path: Path) -> WorkbookFactory:
    """Write an .xlsx file from ``{sheet: rows}``; row 0 is usually a title row."""

    def _make(sheets: Dict[str, SheetRows], name: str = "book.xlsx") -> Path:
        return write_workbook(tmp_path / name, sheets)

    return _make


@pytest.fixture()
def users_products() -> Dict[str, List[List[Any]]]:
    return {
        "user0": [
            ["users"],
            ["id,int64", "name,string", "products:o,ref,product0,user_id"],
            [1, "alice", 1],
            [2, "bob", 2],
            [3, "carol", 3],
        ],
        "product0": [
            ["products"],
            ["user_id,int64", "name,string"],
            [1, "kettle"],
            [1, "teapot"],
            [2, "lamp"],
            [3, "desk"],
        ],
    }
