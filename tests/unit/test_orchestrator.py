from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import weavecarbon.services.orchestrator as orchestrator
from weavecarbon.db.products import InsertResult, ProductStoreError
from weavecarbon.logging.issue_log import IssueLogBuffer
from weavecarbon.models.config_models import ImportConfig
from weavecarbon.services.orchestrator import ProcessingError, process_all, scan_import_files


@pytest.fixture()
def config(temp_workdir: Path) -> ImportConfig:
    return ImportConfig(source_directory=str(temp_workdir / "data"))


def _issue_lines(logs_dir: Path) -> list[dict]:
    lines = []
    for path in sorted(logs_dir.glob("issues-*.log")):
        lines.extend(json.loads(line) for line in path.read_text(encoding="utf-8").splitlines())
    return lines


def test_scan_import_files(tmp_path: Path):
    for name in ("b.xlsx", "a.csv", "c.XLSM", "notes.txt", "~$b.xlsx"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "nested.csv").mkdir()
    assert [p.name for p in scan_import_files(tmp_path)] == ["a.csv", "b.xlsx", "c.XLSM"]


def test_scan_missing_directory(tmp_path: Path):
    with pytest.raises(ProcessingError, match="Directory not found"):
        scan_import_files(tmp_path / "missing")
    (tmp_path / "file.csv").write_text("x", encoding="utf-8")
    with pytest.raises(ProcessingError, match="not a directory"):
        scan_import_files(tmp_path / "file.csv")


def test_empty_directory(config: ImportConfig, temp_workdir: Path):
    result = process_all(config)
    assert result.success_files == 0
    assert result.failed_files == 0
    assert result.file_stats == []
    assert not list((temp_workdir / "logs").glob("issues-*.log"))


def test_mock_mode_success(config, temp_workdir, write_import_csv, base_values):
    write_import_csv(temp_workdir / "data" / "batch.csv", [
        base_values,
        {**base_values, "sku": "SKU-002", "quantity": "500"},
    ])
    result = process_all(config)

    assert result.success_files == 1
    assert result.valid_rows == 2
    assert result.invalid_rows == 0
    assert result.total_co2 > 0
    stat = result.file_stats[0]
    assert stat.status == "success"
    assert stat.stored_rows == 0
    assert stat.total_batches == 0


def test_invalid_rows_are_logged_but_file_succeeds(config, temp_workdir, write_import_csv, base_values):
    write_import_csv(temp_workdir / "data" / "batch.csv", [
        base_values,
        {**base_values, "sku": "SKU-002", "quantity": "abc"},
        {**base_values, "sku": "SKU-001"},
    ])
    result = process_all(config)

    assert result.success_files == 1
    assert result.valid_rows == 2
    assert result.invalid_rows == 1
    assert result.warnings >= 1
    issues = _issue_lines(temp_workdir / "logs")
    assert {"file": "batch.csv", "row": 3, "field": "quantity", "severity": "error"}.items() <= issues[0].items()
    assert any(i["severity"] == "warning" and i["field"] == "sku" for i in issues)


def test_corrupt_file_fails_alone(config, temp_workdir, write_import_csv, base_values):
    (temp_workdir / "data" / "a_broken.xlsx").write_bytes(b"not a workbook")
    write_import_csv(temp_workdir / "data" / "b_good.csv", [base_values])
    result = process_all(config)

    assert result.failed_files == 1
    assert result.success_files == 1
    assert [s.status for s in result.file_stats] == ["failed", "success"]
    issues = _issue_lines(temp_workdir / "logs")
    assert issues[0]["file"] == "a_broken.xlsx"
    assert issues[0]["row"] == -1
    assert issues[0]["field"] == "general"


def test_block_on_errors(temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"), block_on_errors=True)
    write_import_csv(temp_workdir / "data" / "batch.csv", [base_values, {**base_values, "sku": ""}])
    result = process_all(cfg)

    assert result.failed_files == 1
    assert result.total_co2 == 0
    assert result.invalid_rows == 1


def test_live_mode_commits(monkeypatch, temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"), products_table="app.products")
    write_import_csv(temp_workdir / "data" / "batch.csv", [base_values])
    monkeypatch.setattr(orchestrator, "fetch_existing_skus", lambda cursor, table: {"sku-001"})
    inserted = []

    def fake_insert(cursor, table, rows, metrics_callback=None, **kwargs):
        inserted.append((table, rows))
        return InsertResult(inserted_rows=len(rows))
    monkeypatch.setattr(orchestrator, "insert_products", fake_insert)

    cursor = MagicMock()
    buf = IssueLogBuffer(logs_dir=temp_workdir / "logs")
    result = process_all(cfg, cursor=cursor, issue_log=buf)

    assert result.success_files == 1
    assert result.file_stats[0].stored_rows == 1
    assert inserted[0][0] == "app.products"
    cursor.execute.assert_called_with("COMMIT")
    # the existing SKU is reported as a warning, the row is still imported
    assert result.warnings == 1
    issues = _issue_lines(temp_workdir / "logs")
    assert issues[0]["message"] == 'SKU "SKU-001" already exists in the system'


def test_live_mode_store_failure_rolls_back(monkeypatch, temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"), check_existing_skus=False)
    write_import_csv(temp_workdir / "data" / "batch.csv", [base_values])

    def failing_insert(*args, **kwargs):
        raise ProductStoreError("duplicate key value")
    monkeypatch.setattr(orchestrator, "insert_products", failing_insert)

    cursor = MagicMock()
    result = process_all(cfg, cursor=cursor)

    assert result.failed_files == 1
    cursor.execute.assert_called_with("ROLLBACK")
    issues = _issue_lines(temp_workdir / "logs")
    assert "duplicate key value" in issues[-1]["message"]


def test_blocked_file_ends_lookup_transaction(monkeypatch, temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"), block_on_errors=True)
    write_import_csv(temp_workdir / "data" / "batch.csv", [base_values, {**base_values, "sku": ""}])
    monkeypatch.setattr(orchestrator, "fetch_existing_skus", lambda cursor, table: set())
    insert = MagicMock()
    monkeypatch.setattr(orchestrator, "insert_products", insert)

    cursor = MagicMock()
    result = process_all(cfg, cursor=cursor)

    assert result.failed_files == 1
    insert.assert_not_called()
    executed = [c.args[0] for c in cursor.execute.call_args_list]
    assert executed == ["ROLLBACK"]


def test_file_without_valid_rows_opens_no_transaction(monkeypatch, temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"))
    write_import_csv(temp_workdir / "data" / "batch.csv", [{**base_values, "sku": ""}])
    lookup = MagicMock(return_value=set())
    monkeypatch.setattr(orchestrator, "fetch_existing_skus", lookup)
    insert = MagicMock()
    monkeypatch.setattr(orchestrator, "insert_products", insert)

    cursor = MagicMock()
    result = process_all(cfg, cursor=cursor)

    assert result.success_files == 1
    assert result.file_stats[0].stored_rows == 0
    lookup.assert_not_called()
    insert.assert_not_called()
    cursor.execute.assert_not_called()


def test_sku_lookup_failure_is_not_fatal(monkeypatch, temp_workdir, write_import_csv, base_values):
    cfg = ImportConfig(source_directory=str(temp_workdir / "data"))
    write_import_csv(temp_workdir / "data" / "batch.csv", [base_values])

    def failing_lookup(cursor, table):
        raise ProductStoreError("relation does not exist")
    monkeypatch.setattr(orchestrator, "fetch_existing_skus", failing_lookup)
    monkeypatch.setattr(orchestrator, "insert_products", lambda cursor, table, rows, **kw: InsertResult(len(rows)))

    cursor = MagicMock()
    result = process_all(cfg, cursor=cursor)

    assert result.success_files == 1
    executed = [c.args[0] for c in cursor.execute.call_args_list]
    assert executed == ["ROLLBACK", "COMMIT"]
