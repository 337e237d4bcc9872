"""graphvis.csv_normalize

Tabular input handling.

The input CSV uses a sparse encoding: a blank cell means "same as the cell
above it". ``normalize_rows`` resolves that encoding in one forward pass, so
rows must be normalised in file order and never reordered beforehand.

Public API
----------
parse_csv_text(text) -> list[dict[str, str]]
normalize_rows(rows) -> list[dict[str, str]]
normalize_value(value) -> str
"""

from __future__ import annotations

import csv
import io
import logging
import re
from typing import Dict, Iterable, List, Mapping

from .errors import MalformedInput

_LOG = logging.getLogger(__name__)

_WS = re.compile(r"\s+")


def parse_csv_text(text: str) -> List[Dict[str, str]]:
    """
    Parse delimited text into one dict per data row, keyed by the header row.

    Short rows are padded with "" and surplus cells are dropped.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    reader = csv.DictReader(io.StringIO(text), restval="")
    rows: List[Dict[str, str]] = []
    for raw in reader:
        raw.pop(None, None)  # surplus cells beyond the header
        rows.append({k: ("" if v is None else v) for k, v in raw.items()})
    _LOG.debug("parsed %d rows with columns %s", len(rows), reader.fieldnames)
    return rows


def normalize_value(value: str) -> str:
    return _WS.sub(" ", value.strip())


def normalize_rows(rows: Iterable[Mapping[str, str]]) -> List[Dict[str, str]]:
    """
    Trim and collapse whitespace in every cell, then forward-fill cells left
    blank (including whitespace-only ones) from the previous output row.
    Input rows are not modified, and no output cell is blank.

    Raises MalformedInput when a blank cell has no earlier value to copy.
    """
    out: List[Dict[str, str]] = []
    for index, row in enumerate(rows):
        previous = out[-1] if out else None
        new_row: Dict[str, str] = {}
        for key, value in row.items():
            value = normalize_value(value)
            if value == "":
                if previous is None or key not in previous:
                    raise MalformedInput(
                        f"Blank cell in column '{key}' of row {index + 1} has no earlier value to repeat.",
                        column=key,
                        row=index + 1,
                    )
                new_row[key] = previous[key]
            else:
                new_row[key] = value
        out.append(new_row)
    return out
