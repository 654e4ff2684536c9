from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model: one raw spreadsheet row as handed over by the file reader.

values are keyed by the header text exactly as it appears in the file (any casing,
any locale); nothing is normalized yet.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Raw row plus its position in the source file.

    row_number is the 1-based spreadsheet row (header row = 1, first data row = 2),
    so that validation messages point at the line the user sees in Excel.
    """
    row_number: int
    values: dict[str, Any]  # header text -> raw cell value ("" for blanks)
