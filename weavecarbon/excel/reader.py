from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData

"""Import file reader (.xlsx / .csv).

Row 1 is the header row; every later row becomes a RowData keyed by the header text
as written in the file. Blank cells become "", fully blank rows are skipped but the
row numbers of the remaining rows are those the user sees in the spreadsheet.
Values are otherwise passed through untouched; mapping and validation happen later.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "ImportFileError",
    "UnsupportedFileError",
    "read_import_file",
    "frame_to_rows",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".csv")
HEADER_ROW = 1


class ImportFileError(Exception):
    """Raised when a file cannot be opened or parsed."""


class UnsupportedFileError(ImportFileError):
    """Raised for a file type the importer does not read."""


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):  # list-like cell values
        return value
    if isinstance(value, str):
        return value.strip()
    return value


def frame_to_rows(df: pd.DataFrame) -> list[RowData]:
    """Convert a DataFrame read with header=0 into RowData (row numbers 2, 3, ...)."""
    columns = [str(c).strip() for c in df.columns]
    rows: list[RowData] = []
    for offset, raw in enumerate(df.itertuples(index=False, name=None)):
        values = {col: _cell(v) for col, v in zip(columns, raw, strict=False)}
        if all(v == "" for v in values.values()):
            continue
        rows.append(RowData(row_number=offset + HEADER_ROW + 1, values=values))
    return rows


def read_import_file(path: Path, sheet_name: str | None = None) -> list[RowData]:
    """Read one import file.

    Parameters
    ----------
    path: .xlsx/.xlsm workbook or .csv file (UTF-8, BOM allowed)
    sheet_name: workbook sheet to read; None reads the first sheet. Ignored for CSV.

    Raises
    ------
    UnsupportedFileError: unknown suffix
    ImportFileError: missing, unreadable or malformed file
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileError(f"unsupported file type: {path.name}")
    try:
        if suffix == ".csv":
            # keep blank lines so row numbers match the file
            df = pd.read_csv(
                path, dtype=str, encoding="utf-8-sig", keep_default_na=False, skip_blank_lines=False
            )
        else:
            df = pd.read_excel(
                path, sheet_name=sheet_name if sheet_name is not None else 0, dtype=object, engine="openpyxl"
            )
    except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
        raise ImportFileError(f"failed reading {path.name}: {e}") from e

    rows = frame_to_rows(df)
    logger.debug("read %d rows from %s", len(rows), path.name)
    return rows
