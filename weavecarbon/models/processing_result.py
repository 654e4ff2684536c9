from __future__ import annotations

import statistics
from dataclasses import dataclass
from datetime import datetime

from .calculation import AggregateStats
from .product_row import BulkProductRow
from .validation import ValidationResult

"""Result models for a single import (ImportOutcome) and a CLI run over many files
(ProcessingResult, FileStat), plus batch timing statistics for the product store.
"""


@dataclass(frozen=True)
class ImportOutcome:
    """What the pipeline hands back to the UI / API layer for one batch.

    sku_check_performed is False when the existing-SKU lookup was skipped or failed;
    in that case the absence of "already exists" warnings means nothing.
    """
    validation: ValidationResult
    calculated_rows: list[BulkProductRow]
    stats: AggregateStats
    sku_check_performed: bool = False


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics of a CLI run."""
    file_name: str
    status: str  # success/failed
    valid_rows: int
    invalid_rows: int
    stored_rows: int
    total_co2: float
    elapsed_seconds: float
    total_batches: int = 0
    avg_batch_seconds: float = 0.0
    p95_batch_seconds: float = 0.0


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated metrics of a CLI run, rendered as the SUMMARY line."""
    success_files: int
    failed_files: int
    valid_rows: int
    invalid_rows: int
    warnings: int
    total_co2: float  # kg CO2e across all successful files
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # (valid + invalid) / elapsed
    file_stats: list[FileStat] | None = None


class BatchStatsAccumulator:
    """Collects product-store batch timings and summarizes them for FileStat."""

    def __init__(self) -> None:
        self.batch_times: list[float] = []

    def add_batch_time(self, elapsed_seconds: float) -> None:
        self.batch_times.append(elapsed_seconds)

    def get_stats(self) -> tuple[int, float, float]:
        """Calculate batch statistics.

        Returns:
            tuple: (total_batches, avg_batch_seconds, p95_batch_seconds)
        """
        if not self.batch_times:
            return (0, 0.0, 0.0)

        total_batches = len(self.batch_times)
        avg_batch_seconds = statistics.mean(self.batch_times)

        if total_batches == 1:
            p95_batch_seconds = self.batch_times[0]
        else:
            p95_batch_seconds = statistics.quantiles(
                self.batch_times, n=20, method='inclusive'
            )[18]  # 19th of 20 cut points

        return (total_batches, avg_batch_seconds, p95_batch_seconds)
