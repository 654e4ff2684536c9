from __future__ import annotations

from weavecarbon.normalization.mapper import map_header
from weavecarbon.normalization.schema import REQUIRED_FIELDS, TEMPLATE_COLUMNS, template_headers

EXPECTED_ORDER = [
    "sku", "productName", "productType", "quantity", "weightPerUnit",
    "primaryMaterial", "primaryMaterialPercentage", "secondaryMaterial", "secondaryMaterialPercentage",
    "accessories", "materialSource", "processes", "energySource",
    "marketType", "exportCountry", "transportMode",
]


def test_column_order():
    assert [c.key for c in TEMPLATE_COLUMNS] == EXPECTED_ORDER


def test_required_fields():
    optional = {"secondaryMaterial", "secondaryMaterialPercentage", "accessories", "exportCountry"}
    assert set(REQUIRED_FIELDS) == set(EXPECTED_ORDER) - optional
    for column in TEMPLATE_COLUMNS:
        assert column.header.endswith(" *") == column.required


def test_headers_round_trip_through_row_mapper():
    assert [map_header(h) for h in template_headers()] == EXPECTED_ORDER


def test_labels_and_keys_round_trip_too():
    assert [map_header(c.label) for c in TEMPLATE_COLUMNS] == EXPECTED_ORDER
    assert [map_header(c.label_en) for c in TEMPLATE_COLUMNS] == EXPECTED_ORDER
    assert [map_header(c.key) for c in TEMPLATE_COLUMNS] == EXPECTED_ORDER
