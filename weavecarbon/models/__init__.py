"""Domain models for the bulk import and carbon calculation engine."""

from .assessment import (
    AccessoryInput,
    AssessmentCarbonResult,
    CarbonBreakdown,
    EnergySourceInput,
    MaterialInput,
    ProductAssessmentData,
    TransportLeg,
)
from .calculation import AggregateStats, CarbonCalculationResult
from .config_models import DatabaseConfig, ImportConfig
from .product_row import (
    BulkProductRow,
    ConfidenceLevel,
    EnergySource,
    MarketType,
    MaterialSource,
    Scope,
    TransportMode,
)
from .row_data import RowData
from .validation import InvalidRow, Severity, ValidationIssue, ValidationResult

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    # Import models
    "RowData",
    "BulkProductRow",
    "MaterialSource",
    "EnergySource",
    "MarketType",
    "TransportMode",
    "Severity",
    "ValidationIssue",
    "InvalidRow",
    "ValidationResult",
    # Calculation models
    "Scope",
    "ConfidenceLevel",
    "CarbonCalculationResult",
    "AggregateStats",
    # Assessment models
    "MaterialInput",
    "AccessoryInput",
    "EnergySourceInput",
    "TransportLeg",
    "ProductAssessmentData",
    "CarbonBreakdown",
    "AssessmentCarbonResult",
]
