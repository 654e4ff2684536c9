from __future__ import annotations

import pytest

from weavecarbon.calculation.aggregate import get_aggregate_stats
from weavecarbon.calculation.engine import calculate


def test_aggregate_stats(make_row):
    rows = [make_row(quantity=10), make_row(sku="SKU-002", quantity=5, material_source="unknown", processes=())]
    stats = get_aggregate_stats(rows)

    per_unit = [calculate(r).total_co2 for r in rows]
    expected_total = per_unit[0] * 10 + per_unit[1] * 5
    assert stats.total_products == 2
    assert stats.total_quantity == 15
    assert stats.total_co2 == pytest.approx(round(expected_total, 2))
    assert stats.avg_co2_per_product == pytest.approx(round(expected_total / 15, 3))
    assert stats.by_confidence == {"high": 2, "medium": 0, "low": 0}
    assert stats.by_scope == {"scope1": 0, "scope1_2": 0, "scope1_2_3": 2}
    assert all(r.is_calculated for r in stats.calculated_rows)


def test_aggregate_stats_empty():
    stats = get_aggregate_stats([])
    assert stats.total_products == 0
    assert stats.total_co2 == 0
    assert stats.avg_co2_per_product == 0.0
    assert set(stats.by_confidence) == {"high", "medium", "low"}
