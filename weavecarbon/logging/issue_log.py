from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import jsonschema

from ..models.issue_record import IssueRecord

"""Issue log buffering (JSON Lines).

One file per run, logs/issues-YYYYMMDD-HHMMSS.log (UTC), created lazily on the first
flush that has something to write. Each line holds exactly the keys of IssueRecord;
issue_log_schema.json next to this module documents that contract and
validate_issue_line() checks a line against it.
"""

__all__ = [
    "IssueRecord",
    "IssueLogBuffer",
    "LOGS_DIR",
    "SCHEMA_PATH",
    "validate_issue_line",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
SCHEMA_PATH = Path(__file__).with_name("issue_log_schema.json")

_schema: dict[str, Any] | None = None


def _load_schema() -> dict[str, Any]:
    global _schema
    if _schema is None:
        _schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    return _schema


def validate_issue_line(line: str) -> dict[str, Any]:
    """Parse one JSON line and validate it; raises jsonschema.ValidationError on mismatch."""
    data = json.loads(line)
    jsonschema.validate(data, _load_schema())
    return data


class IssueLogBuffer:
    """In-memory buffer of IssueRecords; flush() appends them as JSON Lines.

    Not thread safe; the importer processes files serially.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[IssueRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            logs_dir = self._logs_dir or LOGS_DIR
            logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = logs_dir / f"issues-{stamp}.log"
        return self._file_path

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def extend(self, records: list[IssueRecord]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when there was nothing to write."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
