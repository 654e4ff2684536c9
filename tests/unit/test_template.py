from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from openpyxl import load_workbook

from weavecarbon.excel.template import (
    DATA_SHEET,
    INSTRUCTIONS_SHEET,
    OPTIONS_SHEET,
    default_template_name,
    template_frame,
    write_template,
)
from weavecarbon.normalization.schema import template_headers


def test_template_frame():
    df = template_frame()
    assert list(df.columns) == template_headers()
    assert list(df["Mã SKU *"]) == ["SKU-001", "SKU-002", "SKU-003"]
    # unset sample cells are blank, not NaN
    assert df.loc[0, "Vải phụ"] == ""


def test_write_xlsx_has_three_sheets(tmp_path: Path):
    path = write_template(tmp_path / "template.xlsx")
    wb = load_workbook(path)
    assert wb.sheetnames == [DATA_SHEET, INSTRUCTIONS_SHEET, OPTIONS_SHEET]

    data = wb[DATA_SHEET]
    assert [c.value for c in data[1]] == template_headers()
    assert data.max_row == 4
    assert data.column_dimensions["A"].width == 15

    assert wb[INSTRUCTIONS_SHEET]["A1"].value == "HƯỚNG DẪN SỬ DỤNG FILE MẪU"
    option_labels = [row[0].value for row in wb[OPTIONS_SHEET].iter_rows() if row[0].value]
    assert "Loại sản phẩm:" in option_labels
    assert "Hình thức vận chuyển:" in option_labels


def test_write_csv_has_bom(tmp_path: Path):
    path = write_template(tmp_path / "template.csv", fmt="csv")
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert raw.decode("utf-8-sig").splitlines()[0] == ",".join(template_headers())


def test_unknown_format(tmp_path: Path):
    with pytest.raises(ValueError):
        write_template(tmp_path / "t.pdf", fmt="pdf")


def test_default_template_name():
    assert default_template_name("csv", date(2024, 3, 9)) == "WeaveCarbon_Template_2024-03-09.csv"
