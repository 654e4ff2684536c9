from __future__ import annotations

import math
from collections.abc import Mapping

from ..models.assessment import AssessmentCarbonResult, CarbonBreakdown, MaterialInput, ProductAssessmentData
from ..models.product_row import ConfidenceLevel
from ..models.validation import GENERAL_FIELD, ValidationIssue
from ..normalization.dictionaries import ENERGY_SOURCE_MAP, MATERIAL_MAP, PROCESS_MAP, TRANSPORT_MODE_MAP
from ..normalization.mapper import map_value
from ..normalization.tokens import slugify
from . import factors
from .catalog import get_material_by_id

"""Carbon calculation for the step-wise (single product) assessment.

Unlike the bulk engine, every fallback is made visible: each time a proxy factor
replaces missing or unknown data a note is recorded in proxy_notes and the
confidence level is lowered.
"""

__all__ = [
    "calculate_assessment",
    "validate_assessment",
]

PERCENT_TOLERANCE = 1e-3
ASSESSMENT_ROW = 0  # issues from the wizard are not tied to a spreadsheet row


def _factor(raw: str | None, dictionary: Mapping[str, str], table: Mapping[str, float]) -> tuple[str, float | None]:
    """Resolve a free-text code against a factor table, directly or through its aliases."""
    code = slugify(raw)
    if code in table:
        return code, table[code]
    mapped = map_value(raw, dictionary, None)
    if mapped is not None and mapped in table:
        return mapped, table[mapped]
    return code, None


def _sums_to_100(values: list[float]) -> bool:
    return math.isclose(sum(values), 100.0, abs_tol=PERCENT_TOLERANCE)


def _material_factor(material: MaterialInput, notes: list[str]) -> float:
    catalog_material = get_material_by_id(material.catalog_material_id)
    if catalog_material is not None:
        return catalog_material.co2_factor
    code, factor = _factor(material.material_type, MATERIAL_MAP, factors.ASSESSMENT_MATERIAL_FACTORS)
    if factor is not None:
        notes.append(
            f'Material "{material.display_name}" has no catalog entry; '
            f'generic "{code}" factor {factor} kgCO2e/kg used'
        )
        return factor
    notes.append(
        f'Material "{material.display_name}" is not in the catalog; '
        f"proxy factor {factors.PROXY_MATERIAL_FACTOR} kgCO2e/kg used"
    )
    return factors.PROXY_MATERIAL_FACTOR


def _production_emission(data: ProductAssessmentData, weight_kg: float, notes: list[str]) -> float:
    if not data.production_processes:
        notes.append(
            f"No production process declared; {factors.PROXY_PROCESS} "
            f"({factors.ASSESSMENT_PROCESS_FACTORS[factors.PROXY_PROCESS]}) assumed"
        )
        return weight_kg * factors.ASSESSMENT_PROCESS_FACTORS[factors.PROXY_PROCESS]

    total_factor = 0.0
    for process in data.production_processes:
        code, factor = _factor(process, PROCESS_MAP, factors.ASSESSMENT_PROCESS_FACTORS)
        if factor is None:
            notes.append(f'Unknown process "{process}"; proxy factor {factors.PROXY_PROCESS_FACTOR} used')
            factor = factors.PROXY_PROCESS_FACTOR
        total_factor += factor
    return weight_kg * total_factor


def _energy_emission(data: ProductAssessmentData, weight_kg: float, notes: list[str]) -> tuple[float, bool]:
    """Returns (emission, percentages_ok)."""
    kwh = weight_kg * factors.KWH_PER_KG
    if not data.energy_sources:
        notes.append("No energy source declared; grid electricity assumed")
        return kwh * factors.ASSESSMENT_ENERGY_FACTORS[factors.PROXY_ENERGY_SOURCE], True

    emission = 0.0
    for entry in data.energy_sources:
        _, factor = _factor(entry.source, ENERGY_SOURCE_MAP, factors.ASSESSMENT_ENERGY_FACTORS)
        if factor is None:
            notes.append(f'Unknown energy source "{entry.source}"; grid factor used')
            factor = factors.ASSESSMENT_ENERGY_FACTORS[factors.PROXY_ENERGY_SOURCE]
        emission += kwh * factor * (entry.percentage / 100)

    return emission, _sums_to_100([e.percentage for e in data.energy_sources])


def market_distance(market: str | None) -> float:
    return float(factors.DESTINATION_DISTANCES.get(slugify(market), factors.DEFAULT_DESTINATION_DISTANCE))


def _transport_emission(data: ProductAssessmentData, weight_kg: float, notes: list[str]) -> float:
    weight_t = weight_kg / 1000
    if not data.transport_legs:
        distance = data.estimated_total_distance or market_distance(data.destination_market)
        notes.append(f"No transport legs declared; sea freight over {distance:g} km assumed")
        return weight_t * distance * factors.ASSESSMENT_TRANSPORT_FACTORS[factors.PROXY_TRANSPORT_MODE]

    # legs without a distance share the declared total evenly
    fallback_total = data.estimated_total_distance or market_distance(data.destination_market)
    fallback_leg = fallback_total / len(data.transport_legs)
    emission = 0.0
    for leg in data.transport_legs:
        _, factor = _factor(leg.mode, TRANSPORT_MODE_MAP, factors.ASSESSMENT_TRANSPORT_FACTORS)
        if factor is None:
            notes.append(f'Unknown transport mode "{leg.mode}"; sea freight factor used')
            factor = factors.ASSESSMENT_TRANSPORT_FACTORS[factors.PROXY_TRANSPORT_MODE]
        distance = leg.estimated_distance
        if distance is None or distance <= 0:
            notes.append(f"Transport leg {leg.id} has no distance; estimated {fallback_leg:g} km")
            distance = fallback_leg
        emission += weight_t * distance * factor
    return emission


def _confidence(data: ProductAssessmentData, proxy_used: bool, percentages_ok: bool) -> ConfidenceLevel:
    user_supplied = any(
        m.user_source == "user_other" and get_material_by_id(m.catalog_material_id) is None
        for m in data.materials
    )
    unknown_source = any(m.source == "unknown" for m in data.materials)
    if proxy_used and (user_supplied or unknown_source):
        return ConfidenceLevel.LOW
    if proxy_used or not percentages_ok:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.HIGH


def calculate_assessment(data: ProductAssessmentData) -> AssessmentCarbonResult:
    """Per-product and batch footprint of the product described by `data`.

    Per-product components are rounded to 3 decimals; batch values multiply them by
    the quantity (a quantity below 1 counts as 1). Scope split: scope 1 is 30% of the
    production emission, scope 2 all of the energy emission, scope 3 the materials,
    the transport and the remaining 70% of production.
    """
    notes: list[str] = []
    weight_kg = max(data.weight_per_unit, 0.0) / 1000

    if data.materials:
        materials = sum(weight_kg * (m.percentage / 100) * _material_factor(m, notes) for m in data.materials)
    else:
        notes.append(f"No materials declared; proxy factor {factors.PROXY_MATERIAL_FACTOR} kgCO2e/kg used")
        materials = weight_kg * factors.PROXY_MATERIAL_FACTOR

    production = _production_emission(data, weight_kg, notes)
    energy, percentages_ok = _energy_emission(data, weight_kg, notes)
    transport = _transport_emission(data, weight_kg, notes)

    per_product = CarbonBreakdown(
        materials=round(materials, 3),
        production=round(production, 3),
        energy=round(energy, 3),
        transport=round(transport, 3),
        total=round(materials + production + energy + transport, 3),
    )
    quantity = max(data.quantity, 1)
    total_batch = CarbonBreakdown(
        materials=round(per_product.materials * quantity, 3),
        production=round(per_product.production * quantity, 3),
        energy=round(per_product.energy * quantity, 3),
        transport=round(per_product.transport * quantity, 3),
        total=round(per_product.total * quantity, 3),
    )

    proxy_used = bool(notes)
    if not percentages_ok:
        notes.append("Energy source percentages do not add up to 100%")
    proxy_notes = list(dict.fromkeys(notes))
    direct = factors.DIRECT_MANUFACTURING_SHARE
    return AssessmentCarbonResult(
        per_product=per_product,
        total_batch=total_batch,
        confidence_level=_confidence(data, proxy_used, percentages_ok),
        proxy_used=proxy_used,
        proxy_notes=proxy_notes,
        scope1=round(total_batch.production * direct, 3),
        scope2=round(total_batch.energy, 3),
        scope3=round(total_batch.materials + total_batch.transport + total_batch.production * (1 - direct), 3),
    )


def validate_assessment(data: ProductAssessmentData) -> list[ValidationIssue]:
    """Step-level checks for the wizard. Never raises; an empty list means ready to calculate."""
    issues: list[ValidationIssue] = []
    if not data.product_code.strip():
        issues.append(ValidationIssue.error(ASSESSMENT_ROW, "productCode", "Product code is required"))
    if not data.product_name.strip():
        issues.append(ValidationIssue.error(ASSESSMENT_ROW, "productName", "Product name is required"))
    if data.weight_per_unit <= 0:
        issues.append(ValidationIssue.error(ASSESSMENT_ROW, "weightPerUnit", "Weight per unit must be greater than 0"))
    if data.quantity <= 0:
        issues.append(ValidationIssue.error(ASSESSMENT_ROW, "quantity", "Quantity must be greater than 0"))

    if not data.materials:
        issues.append(ValidationIssue.error(ASSESSMENT_ROW, "materials", "At least one material is required"))
    elif not _sums_to_100([m.percentage for m in data.materials]):
        total = sum(m.percentage for m in data.materials)
        issues.append(ValidationIssue.error(
            ASSESSMENT_ROW, "materials", f"Material percentages must add up to 100% (currently {total:g}%)"
        ))

    if data.energy_sources and not _sums_to_100([e.percentage for e in data.energy_sources]):
        total = sum(e.percentage for e in data.energy_sources)
        issues.append(ValidationIssue.error(
            ASSESSMENT_ROW, "energySources", f"Energy source percentages must add up to 100% (currently {total:g}%)"
        ))

    if not data.destination_market.strip() and not data.transport_legs:
        issues.append(ValidationIssue.warning(
            ASSESSMENT_ROW, GENERAL_FIELD, "No destination market or transport legs; a default distance will be used"
        ))
    return issues
