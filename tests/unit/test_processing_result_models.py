from __future__ import annotations

from datetime import UTC, datetime

import pytest

from weavecarbon.calculation.engine import calculate_bulk_carbon
from weavecarbon.models.processing_result import BatchStatsAccumulator, FileStat, ProcessingResult


class TestBatchStatsAccumulator:
    def test_empty(self):
        assert BatchStatsAccumulator().get_stats() == (0, 0.0, 0.0)

    def test_single_batch(self):
        acc = BatchStatsAccumulator()
        acc.add_batch_time(0.25)
        assert acc.get_stats() == (1, 0.25, 0.25)

    def test_p95(self):
        acc = BatchStatsAccumulator()
        for t in (0.1, 0.2, 0.3, 0.4, 0.5):
            acc.add_batch_time(t)
        total, avg, p95 = acc.get_stats()
        assert total == 5
        assert avg == pytest.approx(0.3)
        assert p95 == pytest.approx(0.48)


def test_processing_result_defaults():
    t = datetime(2024, 1, 1, tzinfo=UTC)
    r = ProcessingResult(1, 0, 5, 0, 0, 1.5, t, t, 0.0, 0.0)
    assert r.file_stats is None
    stat = FileStat("a.csv", "success", 5, 0, 5, 1.5, 0.1)
    assert stat.total_batches == 0
    assert stat.p95_batch_seconds == 0.0


def test_product_row_to_dict(make_row):
    plain = make_row(secondary_material=None).to_dict()
    assert plain["productName"] == "Áo thun cotton"
    assert plain["processes"] == ["cutting"]
    assert plain["sourceRow"] == 2
    assert "secondaryMaterial" not in plain
    assert "calculatedCO2" not in plain

    calculated = calculate_bulk_carbon([make_row()])[0]
    data = calculated.to_dict()
    assert calculated.is_calculated
    assert data["scope"] == "scope1_2_3"
    assert data["confidenceLevel"] == "high"
    assert isinstance(data["calculatedCO2"], float)
