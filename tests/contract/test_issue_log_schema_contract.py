from __future__ import annotations

import json
from pathlib import Path

import jsonschema

from weavecarbon.logging.issue_log import SCHEMA_PATH, IssueLogBuffer, validate_issue_line
from weavecarbon.models.issue_record import IssueRecord
from weavecarbon.models.validation import ValidationIssue

"""Issue log contract: one JSON object per line with exactly the documented keys."""

REQUIRED_KEYS = {"timestamp", "file", "row", "field", "severity", "message"}


def test_schema_is_valid():
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    jsonschema.Draft202012Validator.check_schema(schema)
    assert set(schema["required"]) == REQUIRED_KEYS


def test_records_satisfy_schema(tmp_path: Path):
    buf = IssueLogBuffer(logs_dir=tmp_path)
    buf.append(IssueRecord.from_issue("a.xlsx", ValidationIssue.error(3, "quantity", "Invalid quantity")))
    buf.append(IssueRecord.from_issue("a.xlsx", ValidationIssue.warning(4, "materialPercentage", "sum 90%")))
    buf.append(IssueRecord.create("b.xlsx", -1, "general", "error", "failed reading b.xlsx"))
    path = buf.flush()

    for line in path.read_text(encoding="utf-8").splitlines():
        data = validate_issue_line(line)
        assert set(data) == REQUIRED_KEYS
        assert data["timestamp"].endswith("Z")


def test_file_level_issue_uses_row_minus_one(temp_workdir: Path, capsys):
    from weavecarbon.models.config_models import ImportConfig
    from weavecarbon.services.orchestrator import process_all

    (temp_workdir / "data" / "broken.xlsx").write_bytes(b"\x00\x01")
    process_all(ImportConfig(source_directory="./data"))

    lines = next((temp_workdir / "logs").glob("issues-*.log")).read_text(encoding="utf-8").splitlines()
    data = validate_issue_line(lines[0])
    assert data["row"] == -1
    assert data["field"] == "general"
    assert data["severity"] == "error"
