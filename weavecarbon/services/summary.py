from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for the import CLI.

Format:
SUMMARY files={total}/{total} success={s} failed={f} valid_rows={v} invalid_rows={i}
warnings={w} total_co2e={co2} elapsed_sec={e} throughput_rps={t}
"""

__all__ = [
    "render_summary_line",
]


def _format_number(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if abs(value) < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a finished run.

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> r = ProcessingResult(1, 0, 3, 1, 2, 4.116, t, t, 2.0, 2.0)
    >>> render_summary_line(1, r)
    'SUMMARY files=1/1 success=1 failed=0 valid_rows=3 invalid_rows=1 warnings=2 total_co2e=4.116 elapsed_sec=2 throughput_rps=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"valid_rows={result.valid_rows} "
        f"invalid_rows={result.invalid_rows} "
        f"warnings={result.warnings} "
        f"total_co2e={_format_number(round(result.total_co2, 3))} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
