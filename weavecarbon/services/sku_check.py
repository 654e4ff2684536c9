from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..models.product_row import BulkProductRow
from ..models.validation import ValidationIssue, ValidationResult
from ..validation.validator import merge_validation_warnings, normalize_sku

"""Best-effort check of imported SKUs against the SKUs already stored.

The lookup is a call into the product store; when it fails the import carries on
without the extra warnings and the caller is told the check was not performed.
"""

__all__ = [
    "SkuSource",
    "build_existing_sku_warnings",
    "check_existing_skus",
]

logger = logging.getLogger(__name__)

SkuSource = Callable[[], Iterable[str]]


def build_existing_sku_warnings(rows: Iterable[BulkProductRow], existing_skus: Iterable[str]) -> list[ValidationIssue]:
    """One `sku` warning per row whose SKU (trimmed, upper-cased) is already stored."""
    existing = {normalize_sku(s) for s in existing_skus}
    existing.discard("")
    return [
        ValidationIssue.warning(row.source_row or 1, "sku", f'SKU "{row.sku}" already exists in the system')
        for row in rows
        if row.sku and normalize_sku(row.sku) in existing
    ]


def check_existing_skus(result: ValidationResult, sku_source: SkuSource | None) -> tuple[ValidationResult, bool]:
    """Merge "already exists" warnings into `result`.

    Returns (result, performed). performed is False when there was no source, no valid
    row to check, or the source raised; the original result is returned unchanged then.
    """
    if sku_source is None or not result.valid_rows:
        return result, False
    try:
        existing = list(sku_source())
    except Exception as e:
        logger.warning("existing SKU check skipped: %s", e)
        return result, False

    warnings = build_existing_sku_warnings(result.valid_rows, existing)
    if warnings:
        logger.info("%d rows use a SKU that already exists", len(warnings))
        result = merge_validation_warnings(result, warnings)
    return result, True
