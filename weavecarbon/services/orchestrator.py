from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..db.products import ProductStoreError, fetch_existing_skus, insert_products
from ..excel.reader import SUPPORTED_SUFFIXES, ImportFileError, read_import_file
from ..logging.issue_log import IssueLogBuffer
from ..models.config_models import ImportConfig
from ..models.import_file import FileStatus, ImportFile
from ..models.issue_record import IssueRecord
from ..models.processing_result import BatchStatsAccumulator, FileStat, ImportOutcome, ProcessingResult
from ..models.validation import GENERAL_FIELD
from .pipeline import run_import
from .progress import ProgressTracker

"""Import run orchestration for the CLI.

process_all() scans the configured directory and imports each file on its own:
read -> validate -> check SKUs -> calculate -> store. A failing file never stops the
run; with a cursor every file is its own transaction (COMMIT on success, ROLLBACK
on failure). Without a cursor (mock mode) nothing is read from or written to the
product store.
"""

__all__ = [
    "ProcessingError",
    "scan_import_files",
    "process_all",
]

logger = logging.getLogger(__name__)

FILE_LEVEL_ROW = -1


class ProcessingError(Exception):
    """Fatal problem that prevents the run from starting."""


def scan_import_files(directory: Path) -> list[Path]:
    """Importable files directly in `directory` (non-recursive), sorted by name.

    Office lock files (~$name.xlsx) are ignored.
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (
                p for p in directory.iterdir()
                if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
            ),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _record_outcome_issues(issue_log: IssueLogBuffer, file_name: str, outcome: ImportOutcome) -> None:
    for invalid in outcome.validation.invalid_rows:
        for error in invalid.errors:
            issue_log.append(IssueRecord.from_issue(file_name, error))
    for warning in outcome.validation.warnings:
        issue_log.append(IssueRecord.from_issue(file_name, warning))


def _file_error(issue_log: IssueLogBuffer, file: ImportFile, message: str) -> ImportFile:
    issue_log.append(IssueRecord.create(
        file=file.name, row=FILE_LEVEL_ROW, field=GENERAL_FIELD, severity="error", message=message,
    ))
    logger.error("%s: %s", file.name, message)
    return replace(file, status=FileStatus.FAILED, end_time=datetime.now(UTC), error=message)


def _rollback(cursor: Any) -> None:
    try:
        cursor.execute("ROLLBACK")
    except Exception as e:
        logger.warning("rollback failed: %s", e)


def _process_single_file(
    file_path: Path,
    config: ImportConfig,
    cursor: Any,
    issue_log: IssueLogBuffer,
    batch_stats: BatchStatsAccumulator,
) -> ImportFile:
    file = ImportFile(path=file_path, name=file_path.name, start_time=datetime.now(UTC), status=FileStatus.PROCESSING)

    try:
        raw_rows = read_import_file(file_path, sheet_name=config.sheet_name)
    except ImportFileError as e:
        return _file_error(issue_log, file, str(e))

    sku_source = None
    if cursor is not None and config.check_existing_skus:
        sku_source = lambda: fetch_existing_skus(cursor, config.products_table)  # noqa: E731

    outcome = run_import(raw_rows, sku_source=sku_source)
    _record_outcome_issues(issue_log, file.name, outcome)
    # the lookup only runs when some row is valid; without one no transaction is open
    lookup_ran = sku_source is not None and bool(outcome.validation.valid_rows)
    if lookup_ran and not outcome.sku_check_performed:
        # the failed lookup may have aborted the transaction
        _rollback(cursor)
    lookup_open = lookup_ran and outcome.sku_check_performed

    validation = outcome.validation
    file = replace(
        file,
        total_rows=validation.total_rows,
        valid_rows=validation.valid_count,
        invalid_rows=validation.error_count,
        warnings=validation.warning_count,
    )

    if config.block_on_errors and not validation.is_valid:
        if lookup_open:
            _rollback(cursor)
        return _file_error(issue_log, file, f"{validation.error_count} invalid rows; file not imported")

    stored = 0
    if cursor is not None and outcome.calculated_rows:
        try:
            result = insert_products(
                cursor,
                config.products_table,
                outcome.calculated_rows,
                metrics_callback=lambda m: batch_stats.add_batch_time(m.elapsed_seconds),
            )
            cursor.execute("COMMIT")
        except ProductStoreError as e:
            _rollback(cursor)
            return _file_error(issue_log, file, f"store failed: {e}")
        stored = result.inserted_rows

    logger.info(
        "%s: rows=%d valid=%d invalid=%d stored=%d total_co2e=%.3f",
        file.name, validation.total_rows, validation.valid_count, validation.error_count,
        stored, outcome.stats.total_co2,
    )
    return replace(
        file,
        status=FileStatus.SUCCESS,
        end_time=datetime.now(UTC),
        stored_rows=stored,
        total_co2=outcome.stats.total_co2,
    )


def process_all(config: ImportConfig, cursor: Any = None, issue_log: IssueLogBuffer | None = None) -> ProcessingResult:
    """Import every file of config.source_directory.

    Args:
        config: loaded import configuration
        cursor: psycopg2 cursor for the product store (None = mock mode)
        issue_log: buffer for row issues; a fresh one (logs/issues-*.log) by default

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    issue_log = issue_log if issue_log is not None else IssueLogBuffer()
    file_paths = scan_import_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    invalid_total = warning_total = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            batch_stats = BatchStatsAccumulator()
            file = _process_single_file(file_path, config, cursor, issue_log, batch_stats)

            progress.finish_file(file)
            invalid_total += file.invalid_rows
            warning_total += file.warnings

            total_batches, avg_batch, p95_batch = batch_stats.get_stats()
            elapsed = ((file.end_time or datetime.now(UTC)) - (file.start_time or start_time)).total_seconds()
            file_stats.append(FileStat(
                file_name=file.name,
                status=file.status.value,
                valid_rows=file.valid_rows,
                invalid_rows=file.invalid_rows,
                stored_rows=file.stored_rows,
                total_co2=file.total_co2,
                elapsed_seconds=elapsed,
                total_batches=total_batches,
                avg_batch_seconds=avg_batch,
                p95_batch_seconds=p95_batch,
            ))

    try:
        written = issue_log.flush()
    except OSError as e:
        logger.warning("failed writing issue log: %s", e)
    else:
        if written is not None:
            logger.info("issues written to %s", written)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    rows = progress.valid_rows + invalid_total
    throughput = rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=progress.succeeded,
        failed_files=progress.failed,
        valid_rows=progress.valid_rows,
        invalid_rows=invalid_total,
        warnings=warning_total,
        total_co2=round(progress.total_co2, 3),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
    )
