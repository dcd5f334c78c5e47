"""Conversion of configured workbook sheets into JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Sequence

from sheetdoc_io import Document, SheetDocError, SheetReader

from sheetdoc.config import ConversionJob
from sheetdoc.core.errors import ConversionError
from sheetdoc.core.logger import get_logger
from .hooks import build_hooks


@dataclass
class SheetOutput:
    sheet: str
    rows: int
    output_path: Path


@dataclass
class ConversionResult:
    workbook: Path
    sheets: List[SheetOutput] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(item.rows for item in self.sheets)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Path):
        return value.as_posix()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_documents(documents: Sequence[Document], indent: int | None = 2) -> str:
    """Serialize documents to JSON text; datetimes become ISO-8601 strings."""

    return json.dumps(list(documents), ensure_ascii=False, indent=indent, default=_json_default)


def convert_job(job: ConversionJob, logger=None) -> ConversionResult:
    """Read every sheet of ``job`` and write one JSON file per sheet.

    Sheets sharing the same header settings are read with one cache so
    referenced sheets are materialized once.

    Raises:
        ConversionError: When a sheet fails to convert; ``sheet`` names it.
    """

    logger = logger or get_logger()
    hooks = build_hooks(file_root=job.file_root, time_format=job.time_format)
    try:
        reader = SheetReader.open(job.workbook, hooks=hooks)
    except FileNotFoundError as exc:
        raise ConversionError(str(exc)) from exc

    groups: dict[tuple[int, int], list[str]] = {}
    for sheet in job.sheets:
        header_row = job.header_row if sheet.header_row is None else sheet.header_row
        skip = job.skip if sheet.skip is None else sheet.skip
        groups.setdefault((header_row, skip), []).append(sheet.name)

    documents: dict[str, List[Document]] = {}
    for (header_row, skip), names in groups.items():
        logger.info("Converting sheets %s (header_row=%s, skip=%s)", ",".join(names), header_row, skip)
        try:
            documents.update(reader.read_many(names, header_row=header_row, skip=skip))
        except SheetDocError as exc:
            logger.error("Conversion failed on sheet %s: %s", exc.sheet, exc)
            raise ConversionError(str(exc), sheet=exc.sheet) from exc

    job.output_dir.mkdir(parents=True, exist_ok=True)
    result = ConversionResult(workbook=job.workbook)
    for sheet in job.sheets:
        rows = documents[sheet.name]
        out_path = job.output_dir / sheet.output_name()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(dump_documents(rows, indent=job.indent), encoding="utf-8")
        result.sheets.append(SheetOutput(sheet=sheet.name, rows=len(rows), output_path=out_path))
        logger.info("Wrote %s rows of %s to %s", len(rows), sheet.name, out_path)
    return result
