"""
import_engine.csv_parser - Sheet reading and cell conversion.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Tab vs. comma detection from the header line
  • Header whitespace stripping
  • Converting each cell to the type its column declares

Header validation is not done here; the importer checks the header
list before any row is touched.
"""

from __future__ import annotations

import csv
import io
import math
from datetime import date
from typing import Optional

from import_engine.errors import SheetFormatError
from import_engine.field_map import (
    ASSET_ID_COLUMN, BOOL_COLUMNS, DATE_COLUMNS, FIELD_PREFIX, FLOAT_COLUMNS,
    INT_COLUMNS, LABEL_SEPARATOR, LABELS_COLUMN, LOCATION_COLUMN,
    TEXT_COLUMNS, TRUE_VALUES,
)
from import_engine.paths import split_location
from import_engine.rows import CustomField, ImportRow, Sheet


def prepare_reader(raw: str | bytes) -> Optional[csv.DictReader]:
    """
    Accept raw file content (bytes or str), clean it,
    and return a DictReader.  Returns None if content is empty.
    """
    text = _decode(raw)
    if not text or not text.strip():
        return None

    # Leading blank lines would otherwise become an empty header row
    text = text.lstrip("\r\n")
    first_line = text.split("\n", 1)[0]
    delimiter = "\t" if "\t" in first_line else ","

    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    if reader.fieldnames is None:
        return None

    # Strip whitespace from every header
    reader.fieldnames = [h.strip() for h in reader.fieldnames]
    return reader


def read_sheet(raw: str | bytes) -> Sheet:
    """Parse a whole sheet.  Raises SheetFormatError on the first bad cell."""
    reader = prepare_reader(raw)
    if reader is None:
        return Sheet(headers=[], rows=[])

    rows = []
    for row_num, cells in enumerate(reader, start=1):
        if not any((v or "").strip() for v in cells.values() if isinstance(v, str)):
            continue
        rows.append(parse_row(row_num, cells))
    return Sheet(headers=list(reader.fieldnames), rows=rows)


def parse_row(row_num: int, cells: dict) -> ImportRow:
    row = ImportRow(row_num=row_num)

    def cell(col: str) -> str:
        val = cells.get(col)
        return val.strip() if isinstance(val, str) else ""

    row.location = split_location(cell(LOCATION_COLUMN))
    row.labels = [l.strip() for l in cell(LABELS_COLUMN).split(LABEL_SEPARATOR) if l.strip()]
    row.asset_id = _parse_asset_id(row_num, cell(ASSET_ID_COLUMN))

    for col, attr in TEXT_COLUMNS.items():
        setattr(row, attr, cell(col))

    for col, attr in INT_COLUMNS.items():
        val = cell(col)
        if val:
            setattr(row, attr, _convert(row_num, col, val, _to_int, "integer"))

    for col, attr in FLOAT_COLUMNS.items():
        val = cell(col)
        if val:
            setattr(row, attr, _convert(row_num, col, val, _to_float, "number"))

    for col, attr in BOOL_COLUMNS.items():
        setattr(row, attr, cell(col).lower() in TRUE_VALUES)

    for col, attr in DATE_COLUMNS.items():
        val = cell(col)
        if val:
            setattr(row, attr, _convert(row_num, col, val, date.fromisoformat, "date"))

    for col in cells:
        if col and col.startswith(FIELD_PREFIX):
            row.fields.append(CustomField(name=col[len(FIELD_PREFIX):], value=cell(col)))

    return row


# ── Private helpers ────────────────────────────────────────────────────

# Bounds of a SQLite INTEGER column
INT_MIN, INT_MAX = -(2 ** 63), 2 ** 63 - 1


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw


def _convert(row_num: int, col: str, val: str, conv, expected: str):
    try:
        return conv(val)
    except ValueError:
        raise SheetFormatError(row_num, col, val, expected) from None


def _parse_asset_id(row_num: int, val: str) -> int:
    """'000-012' → 12, '' → 0 (unset)."""
    if not val:
        return 0
    digits = val.replace("-", "")
    if not digits.isdecimal() or int(digits) > INT_MAX:
        raise SheetFormatError(row_num, ASSET_ID_COLUMN, val, "asset ID")
    return int(digits)


def _to_int(val: str) -> int:
    num = int(val)
    if not INT_MIN <= num <= INT_MAX:
        raise ValueError(f"{val} out of range")
    return num


def _to_float(val: str) -> float:
    """Finite floats only; 'nan', 'inf' and overflowing literals are rejected."""
    num = float(val)
    if not math.isfinite(num):
        raise ValueError(f"{val} is not finite")
    return num
