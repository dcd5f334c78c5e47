"""Shared schemas for header descriptors and materialized documents."""

# Module responsibilities:
# - Define the closed set of field types understood by the header mini-language.
# - Provide the immutable FieldDescriptor produced for every schema column.
# - Bundle caller-supplied conversion hooks.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .workbook import Cell

Document = Dict[str, Any]
SheetValueCache = Dict[str, List[Document]]


class FieldType(str, Enum):
    """Type tags accepted in the second segment of a header cell."""

    INT64 = "int64"
    FLOAT64 = "float64"
    STRING = "string"
    FILE = "file"
    TIME = "time"
    REF = "ref"

    @classmethod
    def lookup(cls, tag: str) -> Optional["FieldType"]:
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True)
class FieldDescriptor:
    """Parsed representation of one schema column.

    ``type`` is a :class:`FieldType` for built-in tags and the raw tag string
    for custom types accepted through an ``on_parse`` hook.
    """

    key: str
    type: FieldType | str
    required: bool = True
    args: Tuple[str, ...] = ()
    sheet: str = ""
    row: int = 0
    col: int = 0

    @property
    def is_ref(self) -> bool:
        return self.type is FieldType.REF

    @property
    def path(self) -> List[str]:
        return self.key.split(".")

    @property
    def ref_sheet(self) -> str:
        return self.args[0].strip()

    @property
    def ref_filter(self) -> str:
        return self.args[1]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view used for header introspection."""

        return {
            "key": self.key,
            "req": self.required,
            "type": self.type.value if isinstance(self.type, FieldType) else self.type,
            "args": list(self.args),
            "row": self.row,
            "col": self.col,
        }


@dataclass(frozen=True)
class HeaderSchema:
    """Descriptors of a header row plus the subset of reference fields."""

    fields: Tuple[FieldDescriptor, ...]
    refs: Tuple[FieldDescriptor, ...]

    @property
    def ref_sheets(self) -> List[str]:
        """Distinct referenced sheet names in first-seen order."""

        return list(dict.fromkeys(ref.ref_sheet for ref in self.refs))


Hook = Callable[[FieldDescriptor, "Cell"], Any]


@dataclass(frozen=True)
class ConversionHooks:
    """Caller-supplied strategies for cells the engine cannot type on its own.

    Hooks receive the descriptor and the raw cell and return the value to
    store; raising aborts the read and the exception propagates unchanged.
    """

    on_time: Optional[Hook] = None
    on_file: Optional[Hook] = None
    on_parse: Optional[Hook] = None
