from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .product_row import ConfidenceLevel

"""Step-wise (single product) assessment models.

The assessment wizard edits a ProductAssessmentData object step by step; the
carbon result is recomputed from scratch whenever that object changes.
"""

__all__ = [
    "USER_SOURCES",
    "MaterialInput",
    "AccessoryInput",
    "EnergySourceInput",
    "TransportLeg",
    "ProductAssessmentData",
    "CarbonBreakdown",
    "AssessmentCarbonResult",
]

# How a material entry was chosen in the wizard
USER_SOURCES = ("selected_catalog", "ai_suggested", "user_other")


@dataclass(frozen=True)
class MaterialInput:
    id: str
    material_type: str  # type code, e.g. "cotton"
    percentage: float
    source: str = "unknown"  # domestic | imported | unknown
    certifications: tuple[str, ...] = ()
    catalog_material_id: str | None = None
    custom_name: str | None = None
    user_source: str = "selected_catalog"

    @property
    def display_name(self) -> str:
        return self.custom_name or self.catalog_material_id or self.material_type or "?"


@dataclass(frozen=True)
class AccessoryInput:
    id: str
    name: str
    type: str  # button, zipper, thread ...
    weight: float | None = None  # grams


@dataclass(frozen=True)
class EnergySourceInput:
    id: str
    source: str
    percentage: float


@dataclass(frozen=True)
class TransportLeg:
    id: str
    mode: str  # road | sea | air | rail
    estimated_distance: float | None = None  # km


@dataclass(frozen=True)
class ProductAssessmentData:
    """Wizard state. Only the fields the calculation reads are modelled here."""
    product_code: str = ""
    product_name: str = ""
    product_type: str = ""
    weight_per_unit: float = 0.0  # grams
    quantity: int = 0
    materials: tuple[MaterialInput, ...] = ()
    accessories: tuple[AccessoryInput, ...] = ()
    production_processes: tuple[str, ...] = ()
    energy_sources: tuple[EnergySourceInput, ...] = ()
    destination_market: str = ""
    transport_legs: tuple[TransportLeg, ...] = ()
    estimated_total_distance: float = 0.0  # km
    manufacturing_location: str = ""


@dataclass(frozen=True)
class CarbonBreakdown:
    materials: float = 0.0
    production: float = 0.0
    energy: float = 0.0
    transport: float = 0.0
    total: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "materials": self.materials,
            "production": self.production,
            "energy": self.energy,
            "transport": self.transport,
            "total": self.total,
        }


@dataclass(frozen=True)
class AssessmentCarbonResult:
    per_product: CarbonBreakdown
    total_batch: CarbonBreakdown
    confidence_level: ConfidenceLevel
    proxy_used: bool
    proxy_notes: list[str] = field(default_factory=list)
    scope1: float = 0.0  # kg, whole batch
    scope2: float = 0.0
    scope3: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "perProduct": self.per_product.to_dict(),
            "totalBatch": self.total_batch.to_dict(),
            "confidenceLevel": self.confidence_level.value,
            "proxyUsed": self.proxy_used,
            "proxyNotes": list(self.proxy_notes),
            "scope1": self.scope1,
            "scope2": self.scope2,
            "scope3": self.scope3,
        }
