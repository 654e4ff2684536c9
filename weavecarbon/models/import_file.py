from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""ImportFile domain model and FileStatus enum.

Tracks one spreadsheet through a CLI import run:
pending -> processing -> (success | failed).
"""


class FileStatus(Enum):
    """Processing status of an import file.

    - PENDING: discovered, not yet processed
    - PROCESSING: being read / validated / stored
    - SUCCESS: valid rows calculated (and stored in live mode)
    - FAILED: unreadable, blocked by invalid rows, or the store rejected the batch
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportFile:
    path: Path
    name: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    warnings: int = 0
    stored_rows: int = 0  # rows written to the product store (0 in mock mode)
    total_co2: float = 0.0  # kg CO2e, whole file
    error: str | None = None  # failure reason summary
