from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .product_row import BulkProductRow, ConfidenceLevel, Scope

"""Derived calculation results.

These carry no identity of their own: recomputing from the same BulkProductRow
always yields an equal value, so they are never treated as authoritative.
"""

__all__ = [
    "CarbonCalculationResult",
    "AggregateStats",
]


@dataclass(frozen=True)
class CarbonCalculationResult:
    """Per-unit footprint in kg CO2e, components rounded to 3 decimals."""
    materials_co2: float
    manufacturing_co2: float
    transport_co2: float
    total_co2: float
    scope: Scope
    confidence_level: ConfidenceLevel
    confidence_score: int  # 0-100

    def to_dict(self) -> dict[str, Any]:
        return {
            "materialsCO2": self.materials_co2,
            "manufacturingCO2": self.manufacturing_co2,
            "transportCO2": self.transport_co2,
            "totalCO2": self.total_co2,
            "scope": self.scope.value,
            "confidenceLevel": self.confidence_level.value,
            "confidenceScore": self.confidence_score,
        }


@dataclass(frozen=True)
class AggregateStats:
    """Batch totals over calculated rows."""
    total_products: int
    total_quantity: int
    total_co2: float  # kg CO2e for the whole batch (per-unit x quantity)
    avg_co2_per_product: float  # kg CO2e per unit
    by_confidence: dict[str, int]
    by_scope: dict[str, int]
    calculated_rows: list[BulkProductRow]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalProducts": self.total_products,
            "totalQuantity": self.total_quantity,
            "totalCO2": self.total_co2,
            "avgCO2PerProduct": self.avg_co2_per_product,
            "byConfidence": dict(self.by_confidence),
            "byScope": dict(self.by_scope),
        }
