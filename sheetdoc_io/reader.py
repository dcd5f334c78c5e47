"""Sheet reading pipeline: header -> dependencies -> rows."""

# Module responsibilities:
# - Parse a sheet's header row into descriptors.
# - Materialize referenced sheets first, memoized per top-level read, with cycle detection.
# - Walk data rows until the first blank leading cell and emit documents.

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .coerce import CellCoercer
from .errors import ReferenceCycleError, SheetDocError, SheetNotFoundError
from .fields import parse_header_cells
from .rows import materialize_row
from .schema import ConversionHooks, Document, HeaderSchema, SheetValueCache
from .utils.log import get_logger
from .workbook import Sheet, Workbook

logger = get_logger("reader")


class SheetReader:
    """Turn schema-annotated worksheets into lists of nested documents.

    Row and column indexes are zero-based: ``header_row=1`` is the second
    row of the worksheet.
    """

    def __init__(self, workbook: Workbook, hooks: Optional[ConversionHooks] = None) -> None:
        self.workbook = workbook
        self.coercer = CellCoercer(hooks)

    @classmethod
    def open(cls, path: Path, hooks: Optional[ConversionHooks] = None) -> "SheetReader":
        return cls(Workbook.open(path), hooks=hooks)

    def _sheet(self, name: str) -> Sheet:
        sheet = self.workbook.sheet(name)
        if sheet is None:
            raise SheetNotFoundError(f"sheet {name} is not exists", sheet=name)
        return sheet

    def parse_header(self, sheet_name: str, row: int) -> HeaderSchema:
        """Parse the header row of ``sheet_name``.

        Raises:
            SheetNotFoundError: When the sheet is absent.
            SchemaError: When a header cell is invalid.
        """

        sheet = self._sheet(sheet_name)
        texts = [cell.text for cell in sheet.row_cells(row)]
        return parse_header_cells(
            texts, sheet_name, row, allow_custom=self.coercer.allows_custom_types
        )

    def read(self, sheet_name: str, header_row: int = 1, skip: int = 0) -> List[Document]:
        """Read every data row of ``sheet_name`` into documents.

        Referenced sheets are read on demand with the same ``header_row`` and
        ``skip`` and cached for the duration of this call only.

        Raises:
            SheetDocError: On the first schema, value or reference failure.
        """

        return self.read_many([sheet_name], header_row=header_row, skip=skip)[sheet_name]

    def read_many(
        self, sheet_names: Iterable[str], header_row: int = 1, skip: int = 0
    ) -> Dict[str, List[Document]]:
        """Read several sheets sharing one cache, returned in request order."""

        cache: SheetValueCache = {}
        results: Dict[str, List[Document]] = {}
        for name in sheet_names:
            logger.info(
                "Reading sheet",
                extra={"sheet": name, "header_row": header_row, "skip": skip},
            )
            try:
                results[name] = self._read_cached(cache, (), name, header_row, skip)
            except SheetDocError as exc:
                logger.error(
                    "Sheet read failed",
                    extra={"sheet": name, "error": str(exc)},
                )
                raise
            logger.info(
                "Sheet read",
                extra={"sheet": name, "rows": len(results[name]), "cached": sorted(cache)},
            )
        return results

    def _read_cached(
        self,
        cache: SheetValueCache,
        chain: Tuple[str, ...],
        sheet_name: str,
        header_row: int,
        skip: int,
    ) -> List[Document]:
        if sheet_name in chain:
            cycle = " -> ".join(chain[chain.index(sheet_name):] + (sheet_name,))
            raise ReferenceCycleError(f"sheet references form a cycle: {cycle}", sheet=sheet_name)
        if sheet_name not in cache:
            cache[sheet_name] = self._read_sheet(
                cache, chain + (sheet_name,), sheet_name, header_row, skip
            )
        return cache[sheet_name]

    def _read_sheet(
        self,
        cache: SheetValueCache,
        chain: Tuple[str, ...],
        sheet_name: str,
        header_row: int,
        skip: int,
    ) -> List[Document]:
        sheet = self._sheet(sheet_name)
        schema = self.parse_header(sheet_name, header_row)

        for target in schema.ref_sheets:
            if target not in cache:
                logger.debug(
                    "Loading referenced sheet",
                    extra={"sheet": sheet_name, "target": target},
                )
            self._read_cached(cache, chain, target, header_row, skip)

        documents: List[Document] = []
        row = header_row + skip + 1
        while sheet.cell(row, 0).text:
            documents.append(materialize_row(sheet, schema.fields, cache, row, self.coercer))
            row += 1
        logger.debug(
            "Sheet materialized",
            extra={"sheet": sheet_name, "rows": len(documents), "end_row": row},
        )
        return documents
