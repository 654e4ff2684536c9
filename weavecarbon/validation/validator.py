from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.product_row import BulkProductRow, MarketType
from ..models.row_data import RowData
from ..models.validation import InvalidRow, ValidationIssue, ValidationResult
from ..normalization.dictionaries import (
    ENERGY_SOURCE_MAP,
    EXPORT_COUNTRY_MAP,
    MARKET_TYPE_MAP,
    MATERIAL_MAP,
    MATERIAL_SOURCE_MAP,
    PRODUCT_TYPE_MAP,
    TRANSPORT_MODE_MAP,
)
from ..normalization.mapper import (
    is_blank,
    map_row,
    map_value,
    parse_accessories,
    parse_processes,
    to_float,
    to_int,
)
from ..normalization.schema import COLUMN_BY_KEY, REQUIRED_FIELDS
from ..normalization.tokens import slugify, to_text

"""Row validator for bulk product imports.

validate_rows() is the entry point: raw rows in source order -> ValidationResult.
Each row is mapped, parsed and checked on its own; duplicate SKUs are resolved in a
second pass once every row has been seen. Rows with errors are excluded from
calculation, rows with only warnings are kept.
"""

__all__ = [
    "PERCENT_TOLERANCE",
    "validate_row",
    "validate_rows",
    "merge_validation_warnings",
    "normalize_sku",
]

logger = logging.getLogger(__name__)

PERCENT_TOLERANCE = 1e-3
FIRST_DATA_ROW = 2  # row 1 is the header


def normalize_sku(sku: Any) -> str:
    """SKU comparison key: trimmed, case-insensitive."""
    return to_text(sku).upper()


def _label(field: str) -> str:
    col = COLUMN_BY_KEY.get(field)
    return col.label_en if col else field


def _material_code(raw: Any) -> str | None:
    if is_blank(raw):
        return None
    return map_value(raw, MATERIAL_MAP, None) or slugify(raw) or None


def validate_row(
    raw_row: Mapping[Any, Any], row_number: int
) -> tuple[BulkProductRow | None, dict[str, Any], list[ValidationIssue], list[ValidationIssue]]:
    """Validate one raw row.

    Args:
        raw_row: header text -> raw value
        row_number: 1-based source row number

    Returns:
        (row, data, errors, warnings). `row` is None when there is at least one error;
        `data` always holds whatever could be parsed (camelCase keys).
    """
    mapped = map_row(raw_row)
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    missing: set[str] = set()
    for field in REQUIRED_FIELDS:
        if is_blank(mapped.get(field)):
            missing.add(field)
            errors.append(ValidationIssue.error(
                row_number, field, f'Field "{_label(field)}" ({field}) is required'
            ))

    sku = to_text(mapped.get("sku"))
    product_name = to_text(mapped.get("productName"))
    product_type = map_value(mapped.get("productType"), PRODUCT_TYPE_MAP, "other")

    quantity = to_int(mapped.get("quantity"))
    if "quantity" not in missing and (quantity is None or quantity <= 0):
        errors.append(ValidationIssue.error(
            row_number, "quantity",
            f"Quantity must be a positive whole number (got {to_text(mapped.get('quantity'))!r})",
        ))

    weight = to_float(mapped.get("weightPerUnit"))
    if "weightPerUnit" not in missing and (weight is None or weight <= 0):
        errors.append(ValidationIssue.error(
            row_number, "weightPerUnit",
            f"Weight per unit must be a positive number of grams (got {to_text(mapped.get('weightPerUnit'))!r})",
        ))

    primary_material = _material_code(mapped.get("primaryMaterial"))
    primary_pct = to_float(mapped.get("primaryMaterialPercentage"))
    if "primaryMaterialPercentage" not in missing:
        if primary_pct is None:
            errors.append(ValidationIssue.error(
                row_number, "primaryMaterialPercentage", "Primary material percentage must be a number"
            ))
        elif not 0 <= primary_pct <= 100:
            warnings.append(ValidationIssue.warning(
                row_number, "primaryMaterialPercentage",
                f"Primary material percentage should be between 0 and 100 (got {primary_pct:g})",
            ))

    secondary_material = _material_code(mapped.get("secondaryMaterial"))
    raw_secondary_pct = mapped.get("secondaryMaterialPercentage")
    secondary_pct = to_float(raw_secondary_pct)
    if secondary_pct is None and not is_blank(raw_secondary_pct):
        warnings.append(ValidationIssue.warning(
            row_number, "secondaryMaterialPercentage",
            f"Secondary material percentage {to_text(raw_secondary_pct)!r} is not a number and was ignored",
        ))
    elif secondary_pct is not None and not 0 <= secondary_pct <= 100:
        warnings.append(ValidationIssue.warning(
            row_number, "secondaryMaterialPercentage",
            f"Secondary material percentage should be between 0 and 100 (got {secondary_pct:g})",
        ))

    if primary_pct is not None:
        total_pct = primary_pct + (secondary_pct or 0.0)
        if not math.isclose(total_pct, 100.0, abs_tol=PERCENT_TOLERANCE):
            warnings.append(ValidationIssue.warning(
                row_number, "materialPercentage",
                f"Material percentages add up to {total_pct:g}%, expected 100%",
            ))

    accessories = parse_accessories(mapped.get("accessories"))
    material_source = map_value(mapped.get("materialSource"), MATERIAL_SOURCE_MAP, "unknown")

    processes = parse_processes(mapped.get("processes"))
    if not processes and "processes" not in missing:
        errors.append(ValidationIssue.error(
            row_number, "processes", "At least one production process is required"
        ))
    energy_source = map_value(mapped.get("energySource"), ENERGY_SOURCE_MAP, "grid")

    market_type = map_value(mapped.get("marketType"), MARKET_TYPE_MAP, MarketType.DOMESTIC.value)
    export_country = map_value(mapped.get("exportCountry"), EXPORT_COUNTRY_MAP, None)
    if market_type == MarketType.EXPORT.value and export_country is None:
        raw_country = to_text(mapped.get("exportCountry"))
        detail = f" ({raw_country!r} is not a known destination)" if raw_country else ""
        warnings.append(ValidationIssue.warning(
            row_number, "exportCountry",
            f"Export product without a destination country{detail}; the 'other' distance is used",
        ))
    transport_mode = map_value(mapped.get("transportMode"), TRANSPORT_MODE_MAP, "sea")

    data: dict[str, Any] = {
        "sourceRow": row_number,
        "sku": sku,
        "productName": product_name,
        "productType": product_type,
        "quantity": quantity,
        "weightPerUnit": weight,
        "primaryMaterial": primary_material,
        "primaryMaterialPercentage": primary_pct,
        "secondaryMaterial": secondary_material,
        "secondaryMaterialPercentage": secondary_pct,
        "accessories": ", ".join(accessories) or None,
        "materialSource": material_source,
        "processes": processes,
        "energySource": energy_source,
        "marketType": market_type,
        "exportCountry": export_country,
        "transportMode": transport_mode,
    }

    if errors:
        return None, data, errors, warnings

    row = BulkProductRow(
        sku=sku,
        product_name=product_name,
        product_type=product_type,
        quantity=quantity,  # type: ignore[arg-type]
        weight_per_unit=weight,  # type: ignore[arg-type]
        primary_material=primary_material,  # type: ignore[arg-type]
        primary_material_percentage=primary_pct,  # type: ignore[arg-type]
        secondary_material=secondary_material,
        secondary_material_percentage=secondary_pct or None,
        accessories=data["accessories"],
        material_source=material_source,
        processes=tuple(processes),
        energy_source=energy_source,
        market_type=market_type,
        export_country=export_country,
        transport_mode=transport_mode,
        source_row=row_number,
    )
    return row, data, errors, warnings


def _iter_numbered(raw_rows: Iterable[Any]) -> Iterable[tuple[int, Mapping[Any, Any]]]:
    for index, item in enumerate(raw_rows):
        if isinstance(item, RowData):
            yield item.row_number, item.values
        elif isinstance(item, Mapping):
            yield index + FIRST_DATA_ROW, item
        else:
            raise TypeError(f"row {index + FIRST_DATA_ROW}: expected a mapping, got {type(item).__name__}")


def validate_rows(raw_rows: Iterable[Mapping[Any, Any] | RowData]) -> ValidationResult:
    """Validate and transform a batch of raw rows.

    Rows are processed in source order. Raises TypeError only for a malformed batch
    (not iterable, or an element that is not a row); bad cell data never raises.
    """
    if isinstance(raw_rows, (str, bytes)) or not isinstance(raw_rows, Iterable):
        raise TypeError(f"raw rows must be an iterable of mappings, got {type(raw_rows).__name__}")

    valid_rows: list[BulkProductRow] = []
    invalid_rows: list[InvalidRow] = []
    warnings: list[ValidationIssue] = []
    sku_rows: dict[str, list[int]] = {}
    sku_display: dict[str, str] = {}
    total = 0

    for row_number, raw in _iter_numbered(raw_rows):
        total += 1
        row, data, row_errors, row_warnings = validate_row(raw, row_number)
        warnings.extend(row_warnings)
        if row is None:
            invalid_rows.append(InvalidRow(row=row_number, data=data, errors=row_errors))
            continue
        valid_rows.append(row)
        key = normalize_sku(row.sku)
        if key:
            sku_rows.setdefault(key, []).append(row_number)
            sku_display.setdefault(key, row.sku)

    # second pass: every row sharing a SKU gets the warning, not only the later ones
    for key, rows in sku_rows.items():
        if len(rows) <= 1:
            continue
        listed = ", ".join(str(r) for r in rows)
        for row_number in rows:
            warnings.append(ValidationIssue.warning(
                row_number, "sku",
                f'SKU "{sku_display[key]}" is duplicated in this import (rows {listed})',
            ))

    warnings.sort(key=lambda w: w.row)
    logger.debug(
        "validated %d rows: %d valid, %d invalid, %d warnings",
        total, len(valid_rows), len(invalid_rows), len(warnings),
    )
    return ValidationResult(
        valid_rows=valid_rows,
        invalid_rows=invalid_rows,
        warnings=warnings,
        total_rows=total,
    )


def merge_validation_warnings(
    result: ValidationResult, extra: Iterable[ValidationIssue]
) -> ValidationResult:
    """Return a copy of `result` with extra warnings merged in.

    Duplicates (same row, field and message) are dropped; warnings are re-sorted by row.
    """
    unique: dict[tuple[int, str, str], ValidationIssue] = {}
    for warning in (*result.warnings, *extra):
        unique.setdefault(warning.dedupe_key, warning)
    merged = sorted(unique.values(), key=lambda w: w.row)
    return ValidationResult(
        valid_rows=result.valid_rows,
        invalid_rows=result.invalid_rows,
        warnings=merged,
        total_rows=result.total_rows,
    )
