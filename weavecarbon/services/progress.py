from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

from ..models.import_file import FileStatus, ImportFile

"""File progress bar (tqdm), shown only when stdout is a terminal.

The bar advances once per import file and carries the running totals of the run
(files ok/failed, valid rows, kg CO2e) as its postfix. In CI or when output is piped
no bar is created, but the totals are still kept.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Running totals of an import run, optionally rendered as a tqdm bar."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.total_files = total_files
        self.description = description
        self.files_done = 0
        self.succeeded = 0
        self.failed = 0
        self.valid_rows = 0
        self.total_co2 = 0.0

        self.pbar: tqdm | None = None
        if is_tty_enabled():
            self.pbar = tqdm(total=total_files, desc=description, unit="file", ncols=80, ascii=True)

    @property
    def enabled(self) -> bool:
        return self.pbar is not None

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, file: ImportFile) -> None:
        """Count a processed file and advance the bar."""
        self.files_done += 1
        if file.status is FileStatus.SUCCESS:
            self.succeeded += 1
            self.total_co2 += file.total_co2
        else:
            self.failed += 1
        self.valid_rows += file.valid_rows

        if self.pbar is not None:
            self.pbar.set_description(self.description)
            self.pbar.set_postfix(self.postfix(), refresh=False)
            self.pbar.update(1)

    def postfix(self) -> dict[str, Any]:
        return {"ok": self.succeeded, "failed": self.failed, "rows": self.valid_rows, "co2e": f"{self.total_co2:.1f}"}

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
