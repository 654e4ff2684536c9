from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..calculation.aggregate import get_aggregate_stats
from ..calculation.engine import calculate_bulk_carbon
from ..models.processing_result import ImportOutcome
from ..models.row_data import RowData
from ..validation.validator import validate_rows
from .sku_check import SkuSource, check_existing_skus

"""Bulk import pipeline: raw rows in, validated and calculated products out."""

__all__ = [
    "run_import",
]

logger = logging.getLogger(__name__)


def run_import(raw_rows: Iterable[Mapping[Any, Any] | RowData], sku_source: SkuSource | None = None) -> ImportOutcome:
    """Validate, check SKUs against the store, calculate and aggregate one batch.

    Invalid rows never stop the batch: every valid row is calculated and reported.
    """
    result = validate_rows(raw_rows)
    result, sku_checked = check_existing_skus(result, sku_source)
    calculated = calculate_bulk_carbon(result.valid_rows)
    stats = get_aggregate_stats(calculated)
    logger.info(
        "import batch: rows=%d valid=%d invalid=%d warnings=%d total_co2e=%.3f",
        result.total_rows, result.valid_count, result.error_count, result.warning_count, stats.total_co2,
    )
    return ImportOutcome(
        validation=result,
        calculated_rows=calculated,
        stats=stats,
        sku_check_performed=sku_checked,
    )
