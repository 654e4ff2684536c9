from __future__ import annotations

import re
from datetime import UTC, datetime

import pytest

from weavecarbon.models.processing_result import ProcessingResult
from weavecarbon.services.summary import _format_number, render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=(\d+)/\1 success=(\d+) failed=(\d+) valid_rows=(\d+) invalid_rows=(\d+) "
    r"warnings=(\d+) total_co2e=(\d+(?:\.\d+)?) elapsed_sec=(\d+(?:\.\d+)?) throughput_rps=(\d+(?:\.\d+)?)$"
)

T0 = datetime(2024, 1, 1, 10, 0, 0, tzinfo=UTC)
T1 = datetime(2024, 1, 1, 10, 0, 2, tzinfo=UTC)


def _result(**overrides) -> ProcessingResult:
    values = dict(
        success_files=2,
        failed_files=0,
        valid_rows=1000,
        invalid_rows=0,
        warnings=3,
        total_co2=4116.0,
        start_time=T0,
        end_time=T1,
        elapsed_seconds=2.0,
        throughput_rows_per_sec=500.0,
    )
    values.update(overrides)
    return ProcessingResult(**values)


def test_render_all_success():
    line = render_summary_line(2, _result())
    assert line == (
        "SUMMARY files=2/2 success=2 failed=0 valid_rows=1000 invalid_rows=0 "
        "warnings=3 total_co2e=4116 elapsed_sec=2 throughput_rps=500"
    )
    assert SUMMARY_PATTERN.match(line)


def test_render_partial_failure():
    line = render_summary_line(3, _result(success_files=2, failed_files=1, invalid_rows=7, elapsed_seconds=1.5))
    m = SUMMARY_PATTERN.match(line)
    assert m is not None
    assert m.group(3) == "1"
    assert m.group(5) == "7"
    assert "elapsed_sec=1.5 " in line


def test_total_co2_rounded_to_grams():
    line = render_summary_line(1, _result(total_co2=12.345678))
    assert "total_co2e=12.346 " in line


@pytest.mark.parametrize(
    "value,expected",
    [(0, "0"), (0.0, "0"), (3.0, "3"), (2.5, "2.5"), (0.000123, "0.000123"), (0.001, "0.001")],
)
def test_format_number(value, expected):
    assert _format_number(value) == expected
