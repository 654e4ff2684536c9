"""Emission factors, the bulk calculation engine and the step-wise assessment."""

from .aggregate import get_aggregate_stats
from .assessment import calculate_assessment, validate_assessment
from .catalog import (
    MATERIAL_CATALOG,
    CatalogMaterial,
    calculate_material_confidence,
    get_material_by_id,
    get_material_warnings,
    get_materials_by_family,
    get_materials_by_type,
    get_proxy_emission_factor,
    search_material_catalog,
)
from .engine import calculate, calculate_bulk_carbon, calculate_carbon_for_product, confidence_level_for

__all__ = [
    # Bulk engine
    "calculate",
    "calculate_carbon_for_product",
    "calculate_bulk_carbon",
    "confidence_level_for",
    "get_aggregate_stats",
    # Assessment
    "calculate_assessment",
    "validate_assessment",
    # Catalog
    "CatalogMaterial",
    "MATERIAL_CATALOG",
    "get_material_by_id",
    "search_material_catalog",
    "get_materials_by_type",
    "get_materials_by_family",
    "get_proxy_emission_factor",
    "get_material_warnings",
    "calculate_material_confidence",
]
