from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace

from ..models.calculation import CarbonCalculationResult
from ..models.product_row import BulkProductRow, ConfidenceLevel, MarketType, MaterialSource, Scope
from ..normalization.dictionaries import (
    ENERGY_SOURCE_MAP,
    EXPORT_COUNTRY_MAP,
    MARKET_TYPE_MAP,
    MATERIAL_MAP,
    MATERIAL_SOURCE_MAP,
    PROCESS_MAP,
    TRANSPORT_MODE_MAP,
)
from ..normalization.mapper import map_value
from . import factors

"""Emission calculation engine for bulk-imported rows.

calculate() is a pure function of one BulkProductRow: no I/O, no shared state, same
input -> same result. Codes are passed through the canonicalization dictionaries once
more at this boundary, so rows built by hand ("Cotton", "cutting") resolve the same
way as rows produced by the validator.
"""

__all__ = [
    "BASE_CONFIDENCE",
    "calculate",
    "calculate_carbon_for_product",
    "calculate_bulk_carbon",
    "confidence_level_for",
]

BASE_CONFIDENCE = 50
MAX_CONFIDENCE = 100
HIGH_CONFIDENCE = 85
MEDIUM_CONFIDENCE = 65
_PERCENT_TOLERANCE = 1e-3


def _code(value: str | None, dictionary) -> str | None:
    if not value:
        return None
    return map_value(value, dictionary, value)


def _material_factor(material: str | None) -> float:
    return factors.MATERIAL_FACTORS.get(_code(material, MATERIAL_MAP), factors.DEFAULT_MATERIAL_FACTOR)


def confidence_level_for(score: int) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def calculate(row: BulkProductRow) -> CarbonCalculationResult:
    """Per-unit carbon footprint of one product row.

    Steps:
    1. Materials: weight share x material factor per material, times the sourcing factor
    2. Manufacturing: weight x sum of process factors x energy factor
    3. Transport: weight x (market distance / 1000) x mode factor
    4. Total = 1 + 2 + 3, everything rounded to 3 decimals
    5. Scope and confidence from data completeness
    """
    weight_kg = row.weight_per_unit / 1000
    material_source = _code(row.material_source, MATERIAL_SOURCE_MAP) or MaterialSource.UNKNOWN.value
    energy_source = _code(row.energy_source, ENERGY_SOURCE_MAP)
    market_type = _code(row.market_type, MARKET_TYPE_MAP)
    export_country = _code(row.export_country, EXPORT_COUNTRY_MAP)
    transport_mode = _code(row.transport_mode, TRANSPORT_MODE_MAP)
    processes = [_code(p, PROCESS_MAP) for p in row.processes if p]

    # 1. materials
    primary_co2 = weight_kg * (row.primary_material_percentage / 100) * _material_factor(row.primary_material)
    secondary_co2 = 0.0
    if row.secondary_material and row.secondary_material_percentage:
        secondary_co2 = (
            weight_kg * (row.secondary_material_percentage / 100) * _material_factor(row.secondary_material)
        )
    source_factor = factors.MATERIAL_SOURCE_FACTORS.get(material_source, factors.DEFAULT_MATERIAL_SOURCE_FACTOR)
    materials_co2 = (primary_co2 + secondary_co2) * source_factor

    # 2. manufacturing
    process_total = sum(factors.PROCESS_FACTORS.get(p, factors.DEFAULT_PROCESS_FACTOR) for p in processes)
    energy_factor = factors.ENERGY_FACTORS.get(energy_source, factors.DEFAULT_ENERGY_FACTOR)
    manufacturing_co2 = weight_kg * process_total * energy_factor

    # 3. transport (weight x distance/1000, kept as the dashboard has always computed it)
    is_domestic = market_type == MarketType.DOMESTIC.value
    market_key = MarketType.DOMESTIC.value if is_domestic else (export_country or "other")
    distance_km = factors.MARKET_DISTANCES.get(market_key, factors.DEFAULT_MARKET_DISTANCE)
    transport_factor = factors.TRANSPORT_FACTORS.get(transport_mode, factors.DEFAULT_TRANSPORT_FACTOR)
    transport_co2 = weight_kg * (distance_km / 1000) * transport_factor

    # 4. total
    total_co2 = materials_co2 + manufacturing_co2 + transport_co2

    # 5. scope & confidence
    primary_pct = row.primary_material_percentage or 0.0
    secondary_pct = row.secondary_material_percentage or 0.0
    has_full_material_data = bool(row.primary_material) and (
        math.isclose(primary_pct, 100.0, abs_tol=_PERCENT_TOLERANCE)
        or (
            bool(row.secondary_material)
            and math.isclose(primary_pct + secondary_pct, 100.0, abs_tol=_PERCENT_TOLERANCE)
        )
    )
    has_full_manufacturing_data = len(processes) > 0 and bool(energy_source)
    has_full_transport_data = bool(transport_mode) and (is_domestic or bool(export_country))

    scope = Scope.SCOPE1
    score = BASE_CONFIDENCE
    if has_full_manufacturing_data:
        scope = Scope.SCOPE1_2
        score += 20
    # independent of the manufacturing check; both bonuses can stack
    if has_full_material_data and has_full_transport_data:
        scope = Scope.SCOPE1_2_3
        score += 30

    if material_source != MaterialSource.UNKNOWN.value:
        score += 5
    if len(processes) >= 2:
        score += 5
    if market_type == MarketType.EXPORT.value and export_country:
        score += 5
    score = max(0, min(score, MAX_CONFIDENCE))

    return CarbonCalculationResult(
        materials_co2=round(materials_co2, 3),
        manufacturing_co2=round(manufacturing_co2, 3),
        transport_co2=round(transport_co2, 3),
        total_co2=round(total_co2, 3),
        scope=scope,
        confidence_level=confidence_level_for(score),
        confidence_score=score,
    )


# name used by the dashboard API layer
calculate_carbon_for_product = calculate


def calculate_bulk_carbon(rows: Iterable[BulkProductRow]) -> list[BulkProductRow]:
    """Annotate every row with calculated_co2 / scope / confidence_level.

    Returns new row objects; the input rows are left untouched.
    """
    calculated: list[BulkProductRow] = []
    for row in rows:
        result = calculate(row)
        calculated.append(replace(
            row,
            calculated_co2=result.total_co2,
            scope=result.scope,
            confidence_level=result.confidence_level,
        ))
    return calculated
