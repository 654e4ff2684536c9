# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from weavecarbon.logging.init import reset_logging
from weavecarbon.models.product_row import BulkProductRow
from weavecarbon.normalization.schema import COLUMN_BY_KEY, TEMPLATE_COLUMNS

# One fully valid row, keyed by canonical field (values as a user would type them)
BASE_RAW_VALUES: dict[str, Any] = {
    "sku": "SKU-001",
    "productName": "Áo thun cotton",
    "productType": "Áo thun",
    "quantity": "1000",
    "weightPerUnit": "200",
    "primaryMaterial": "Cotton",
    "primaryMaterialPercentage": "100",
    "secondaryMaterial": "",
    "secondaryMaterialPercentage": "",
    "accessories": "Nút, Chỉ may",
    "materialSource": "Trong nước",
    "processes": "Cắt may",
    "energySource": "Điện lưới",
    "marketType": "Xuất khẩu",
    "exportCountry": "EU (Châu Âu)",
    "transportMode": "Đường biển",
}


@pytest.fixture(autouse=True)
def _fresh_logging():
    # handlers bind sys.stdout at creation; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
products_table: products
check_existing_skus: true
block_on_errors: false
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_raw_row() -> Callable[..., dict[str, Any]]:
    """Factory: a raw row keyed by the template headers; overrides use canonical keys."""
    def _make(**overrides: Any) -> dict[str, Any]:
        values = {**BASE_RAW_VALUES, **overrides}
        return {COLUMN_BY_KEY[key].header: value for key, value in values.items()}
    return _make


@pytest.fixture()
def make_row() -> Callable[..., BulkProductRow]:
    """Factory: a canonical row (200 g cotton tee, domestic source, exported by sea to the EU)."""
    base = BulkProductRow(
        sku="SKU-001",
        product_name="Áo thun cotton",
        product_type="tshirt",
        quantity=10,
        weight_per_unit=200,
        primary_material="cotton",
        primary_material_percentage=100,
        material_source="domestic",
        processes=("cutting",),
        energy_source="grid",
        market_type="export",
        export_country="eu",
        transport_mode="sea",
        source_row=2,
    )

    def _make(**overrides: Any) -> BulkProductRow:
        return replace(base, **overrides)
    return _make


@pytest.fixture()
def write_import_csv() -> Callable[[Path, list[dict[str, Any]]], Path]:
    """Write rows (keyed by canonical field) as an import CSV with template headers."""
    def _write(path: Path, rows: list[dict[str, Any]]) -> Path:
        records = [[row.get(c.key, "") for c in TEMPLATE_COLUMNS] for row in rows]
        df = pd.DataFrame(records, columns=[c.header for c in TEMPLATE_COLUMNS])
        df.to_csv(path, index=False, encoding="utf-8-sig")
        return path
    return _write


@pytest.fixture()
def base_values() -> dict[str, Any]:
    return dict(BASE_RAW_VALUES)
