from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .validation import ValidationIssue

"""IssueRecord model for the JSON Lines issue log.

Each validation finding of an import run is persisted as one line with a fixed set
of keys; file-level problems (unreadable file, bad shape) use row=-1.
"""

__all__ = [
    "IssueRecord",
]


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: import file name
        row: 1-based row number, -1 when the row is unknown
        field: canonical field key or "general"
        severity: error | warning
        message: description
    """
    timestamp: str
    file: str
    row: int
    field: str
    severity: str
    message: str

    @staticmethod
    def create(file: str, row: int, field: str, severity: str, message: str) -> IssueRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            file=file,
            row=row,
            field=field,
            severity=severity,
            message=message,
        )

    @staticmethod
    def from_issue(file: str, issue: ValidationIssue) -> IssueRecord:
        return IssueRecord.create(
            file=file,
            row=issue.row,
            field=issue.field,
            severity=issue.severity.value,
            message=issue.message,
        )

    def to_json_line(self) -> str:
        # asdict keeps the key set fixed
        return json.dumps(asdict(self), ensure_ascii=False)
