"""Tabular views over materialized documents."""

from __future__ import annotations

from typing import Any, Iterable, List

import pandas as pd

from .schema import Document


def _summarize(value: Any) -> Any:
    if isinstance(value, list):
        return len(value)
    if isinstance(value, dict):
        return {key: _summarize(item) for key, item in value.items()}
    return value


def documents_to_frame(documents: Iterable[Document]) -> pd.DataFrame:
    """Flatten documents into a DataFrame with dot-separated column names.

    Reference results are reported as the number of matched documents so one
    row of the frame stays one row of the sheet.
    """

    rows: List[Document] = [_summarize(document) for document in documents]
    if not rows:
        return pd.DataFrame()
    return pd.json_normalize(rows, sep=".")
