from __future__ import annotations

import pytest

from weavecarbon.normalization.dictionaries import MATERIAL_MAP, PRODUCT_TYPE_MAP, build_dictionary
from weavecarbon.normalization.mapper import (
    map_header,
    map_row,
    map_value,
    parse_accessories,
    parse_processes,
    to_float,
    to_int,
)


def test_map_value_resolves_aliases_and_defaults():
    assert map_value("Cotton 100%", MATERIAL_MAP, None) == "cotton"
    assert map_value("  POLYESTER tái chế ", MATERIAL_MAP, None) == "recycled_polyester"
    assert map_value("Áo thun", PRODUCT_TYPE_MAP, "other") == "tshirt"
    assert map_value("", MATERIAL_MAP, "x") == "x"
    assert map_value("unknown stuff", MATERIAL_MAP, None) is None


def test_parse_processes_maps_splits_and_dedupes():
    assert parse_processes("Dệt kim, Cắt may; cutting | Nhuộm") == ["knitting", "cutting_sewing", "dyeing"]
    assert parse_processes(["knit", "weave"]) == ["knitting", "weaving"]
    assert parse_processes("") == []
    assert parse_processes(None) == []


def test_parse_processes_keeps_unknown_tokens_as_slugs():
    assert parse_processes("Giặt đá, Cắt may") == ["giat_da", "cutting_sewing"]


def test_parse_accessories_dedupes_case_insensitively():
    assert parse_accessories("Nút, nút; Khoá kéo") == ["Nút", "Khoá kéo"]
    assert parse_accessories("") == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12,5", 12.5),
        ("1.000.000", 1000000.0),
        ("1.000,5", 1000.5),
        ("1,000", 1000.0),
        ("1,000.5", 1000.5),
        ("66.667", 66.667),
        ("33.333", 33.333),
        ("250.500", 250.5),
        ("1.000", 1.0),
        ("0.250", 0.25),
        ("80%", 80.0),
        (" 42 ", 42.0),
        (3, 3.0),
        (2.5, 2.5),
    ],
)
def test_to_float_accepts_common_spellings(raw, expected):
    assert to_float(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["abc", "", None, float("inf"), float("nan"), True])
def test_to_float_rejects_garbage(raw):
    assert to_float(raw) is None


def test_to_int():
    assert to_int("12") == 12
    assert to_int(12.0) == 12
    assert to_int("12.5") is None
    assert to_int("abc") is None


def test_map_header_variants():
    assert map_header("Mã SKU *") == "sku"
    assert map_header("SKU") == "sku"
    assert map_header("qty") == "quantity"
    assert map_header("Trọng lượng (gram) *") == "weightPerUnit"
    assert map_header("Primary material percentage") == "primaryMaterialPercentage"
    assert map_header("random column") is None


def test_map_row_keeps_unknown_headers():
    assert map_row({"Mã SKU *": "A", "Ghi chú": 1}) == {"sku": "A", "Ghi chú": 1}


def test_map_row_first_non_blank_value_wins():
    assert map_row({"SKU": "", "Mã SKU *": "B"})["sku"] == "B"
    assert map_row({"SKU": "A", "Mã SKU *": "B"})["sku"] == "A"


def test_map_row_rejects_non_mapping():
    with pytest.raises(TypeError):
        map_row(["a", "b"])  # type: ignore[arg-type]


def test_build_dictionary_detects_collisions():
    with pytest.raises(ValueError, match="maps to both"):
        build_dictionary({"a": ["Xy"], "b": ["x y"]})


def test_dictionaries_are_read_only():
    with pytest.raises(TypeError):
        MATERIAL_MAP["new"] = "cotton"  # type: ignore[index]
