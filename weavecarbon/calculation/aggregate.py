from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from ..models.calculation import AggregateStats
from ..models.product_row import BulkProductRow, ConfidenceLevel, Scope
from .engine import calculate_bulk_carbon

"""Batch aggregation over calculated rows."""

__all__ = [
    "get_aggregate_stats",
]


def get_aggregate_stats(rows: Iterable[BulkProductRow]) -> AggregateStats:
    """Totals and distributions for a batch of valid rows.

    Rows are (re)calculated first, so the stats never depend on stale calculated
    fields. total_co2 is the batch footprint: sum of per-unit CO2e x quantity.
    """
    calculated = calculate_bulk_carbon(rows)

    total_quantity = sum(r.quantity for r in calculated)
    total_co2 = sum((r.calculated_co2 or 0.0) * r.quantity for r in calculated)
    avg_co2 = total_co2 / total_quantity if total_quantity > 0 else 0.0

    confidence_counts = Counter(r.confidence_level for r in calculated)
    scope_counts = Counter(r.scope for r in calculated)

    return AggregateStats(
        total_products=len(calculated),
        total_quantity=total_quantity,
        total_co2=round(total_co2, 2),
        avg_co2_per_product=round(avg_co2, 3),
        by_confidence={level.value: confidence_counts.get(level, 0) for level in ConfidenceLevel},
        by_scope={scope.value: scope_counts.get(scope, 0) for scope in Scope},
        calculated_rows=calculated,
    )
