"""Read-only workbook access for the conversion engine."""

# Module responsibilities:
# - Wrap openpyxl so the engine sees sheets as zero-based grids of cells.
# - Expose typed accessors (int/float/datetime) with explicit failures.

from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from openpyxl import Workbook as OpenpyxlWorkbook
from openpyxl import load_workbook
from openpyxl.utils.datetime import from_excel

from .utils.log import get_logger

logger = get_logger("workbook")


class Cell:
    """A single decoded cell value."""

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Cell({self.value!r})"

    @property
    def text(self) -> str:
        """Trimmed textual representation; empty for blank cells."""

        value = self.value
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value).strip()

    def as_int(self) -> int:
        """Return the cell as an integer.

        Raises:
            ValueError: When the content is not a whole number.
        """

        value = self.value
        if isinstance(value, bool):
            raise ValueError(f"{self.text!r} is not an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value!r} is not an integer")
            return int(value)
        return int(self.text)

    def as_float(self) -> float:
        """Return the cell as a float.

        Raises:
            ValueError: When the content is not numeric.
        """

        value = self.value
        if isinstance(value, bool):
            raise ValueError(f"{self.text!r} is not a number")
        if isinstance(value, (int, float)):
            return float(value)
        return float(self.text)

    def as_datetime(self) -> datetime:
        """Decode the cell as a naive datetime.

        Native date cells are returned as-is, numbers are treated as Excel
        serial dates (1900 system) and text must be ISO-8601.

        Raises:
            ValueError: When the content cannot be decoded.
        """

        value = self.value
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, time):
            return datetime.combine(date(1899, 12, 30), value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            decoded = from_excel(value)
            if isinstance(decoded, datetime):
                return decoded
            raise ValueError(f"{value!r} is not a date serial")
        return datetime.fromisoformat(self.text)


_EMPTY = Cell()


class Sheet:
    """Zero-based grid view over one worksheet."""

    def __init__(self, name: str, rows: List[Tuple[Any, ...]]) -> None:
        self.name = name
        self._rows = rows

    def cell(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col); coordinates outside the data are blank."""

        if row < 0 or col < 0 or row >= len(self._rows):
            return _EMPTY
        values = self._rows[row]
        if col >= len(values):
            return _EMPTY
        return Cell(values[col])

    def row_cells(self, row: int) -> List[Cell]:
        """Return every cell of a row, in column order."""

        if row < 0 or row >= len(self._rows):
            return []
        return [Cell(value) for value in self._rows[row]]


class Workbook:
    """Read-only collection of sheets loaded up front."""

    def __init__(self, sheets: Dict[str, Sheet], path: Optional[Path] = None) -> None:
        self._sheets = sheets
        self.path = path

    @classmethod
    def open(cls, path: Path) -> "Workbook":
        """Load every sheet of an ``.xlsx`` workbook.

        Raises:
            FileNotFoundError: When the workbook does not exist.
        """

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Source workbook not found: {path}")

        logger.info("Opening workbook", extra={"path": str(path)})
        wb = load_workbook(path, data_only=True)
        try:
            workbook = cls.from_openpyxl(wb, path=path)
        finally:
            wb.close()
        logger.info(
            "Workbook loaded",
            extra={"path": str(path), "sheets": workbook.sheet_names},
        )
        return workbook

    @classmethod
    def from_openpyxl(cls, wb: OpenpyxlWorkbook, path: Optional[Path] = None) -> "Workbook":
        """Snapshot an already opened openpyxl workbook."""

        sheets: Dict[str, Sheet] = {}
        for ws in wb.worksheets:
            rows = [tuple(values) for values in ws.iter_rows(values_only=True)]
            sheets[ws.title] = Sheet(ws.title, rows)
        return cls(sheets, path=path)

    @property
    def sheet_names(self) -> List[str]:
        return list(self._sheets)

    def sheet(self, name: str) -> Optional[Sheet]:
        return self._sheets.get(name)
