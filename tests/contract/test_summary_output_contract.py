from __future__ import annotations

import re

import pytest

from weavecarbon.cli import main as cli_main

"""The last line of every completed run is the SUMMARY line."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=(\d+)/\1 success=(\d+) failed=(\d+) valid_rows=(\d+) invalid_rows=(\d+) "
    r"warnings=(\d+) total_co2e=(\d+(?:\.\d+)?) elapsed_sec=(\d+(?:\.\d+)?) throughput_rps=(\d+(?:\.\d+)?)$"
)


@pytest.fixture(autouse=True)
def _no_database(monkeypatch):
    monkeypatch.setenv("DISABLE_DB_CONNECT", "1")


def test_summary_is_last_line(write_config, temp_workdir, write_import_csv, base_values, capsys):
    write_import_csv(temp_workdir / "data" / "a.csv", [
        base_values,
        {**base_values, "sku": "SKU-002", "primaryMaterialPercentage": "90"},
        {**base_values, "sku": "SKU-003", "quantity": ""},
    ])
    cli_main([])
    last = capsys.readouterr().out.strip().splitlines()[-1]
    m = SUMMARY_PATTERN.match(last)
    assert m is not None, last
    files, success, failed, valid, invalid, warnings = (int(m.group(i)) for i in range(1, 7))
    assert (files, success, failed, valid, invalid) == (1, 1, 0, 2, 1)
    assert warnings == 1
    assert float(m.group(7)) > 0


def test_summary_without_files(write_config, capsys):
    cli_main([])
    last = capsys.readouterr().out.strip().splitlines()[-1]
    assert last.startswith("SUMMARY files=0/0 success=0 failed=0 valid_rows=0 invalid_rows=0 warnings=0 total_co2e=0 ")
