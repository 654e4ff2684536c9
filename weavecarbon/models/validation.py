from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .product_row import BulkProductRow

"""Validation result models for the bulk import.

Two severities only: an ERROR excludes the row from the valid set, a WARNING is
advisory and the row is kept. Counts are derived from the row lists so that
valid_count + error_count == total_rows always holds.
"""

__all__ = [
    "Severity",
    "ValidationIssue",
    "InvalidRow",
    "ValidationResult",
    "GENERAL_FIELD",
]

GENERAL_FIELD = "general"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single row-level finding.

    Attributes:
        row: 1-based source row number (header row = 1)
        field: canonical field key, "materialPercentage", or "general"
        message: human readable description
        severity: error | warning
    """
    row: int
    field: str
    message: str
    severity: Severity

    @staticmethod
    def error(row: int, field: str, message: str) -> ValidationIssue:
        return ValidationIssue(row=row, field=field, message=message, severity=Severity.ERROR)

    @staticmethod
    def warning(row: int, field: str, message: str) -> ValidationIssue:
        return ValidationIssue(row=row, field=field, message=message, severity=Severity.WARNING)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def dedupe_key(self) -> tuple[int, str, str]:
        return (self.row, self.field, self.message)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data

    def to_json_line(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass(frozen=True)
class InvalidRow:
    """A rejected row with whatever could be parsed from it."""
    row: int
    data: dict[str, Any]  # partial row, camelCase keys
    errors: list[ValidationIssue]

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "data": dict(self.data),
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one batch of raw rows.

    Every source row lands in exactly one of valid_rows / invalid_rows.
    """
    valid_rows: list[BulkProductRow]
    invalid_rows: list[InvalidRow]
    warnings: list[ValidationIssue] = field(default_factory=list)
    total_rows: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.invalid_rows

    @property
    def valid_count(self) -> int:
        return len(self.valid_rows)

    @property
    def error_count(self) -> int:
        return len(self.invalid_rows)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "validRows": [r.to_dict() for r in self.valid_rows],
            "invalidRows": [r.to_dict() for r in self.invalid_rows],
            "warnings": [w.to_dict() for w in self.warnings],
            "totalRows": self.total_rows,
            "validCount": self.valid_count,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
        }
