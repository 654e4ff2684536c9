from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""BulkProductRow model and the closed code domains it carries.

A BulkProductRow is the canonical, field-keyed shape of one spreadsheet row after
header mapping and value normalization. It is created by the validator, is
read-only afterwards, and is the only input the emission engine accepts.
"""

__all__ = [
    "MaterialSource",
    "EnergySource",
    "MarketType",
    "TransportMode",
    "Scope",
    "ConfidenceLevel",
    "BulkProductRow",
    "WIRE_KEYS",
]


class MaterialSource(str, Enum):
    DOMESTIC = "domestic"
    IMPORTED = "imported"
    UNKNOWN = "unknown"


class EnergySource(str, Enum):
    GRID = "grid"
    SOLAR = "solar"
    COAL = "coal"
    MIXED = "mixed"


class MarketType(str, Enum):
    DOMESTIC = "domestic"
    EXPORT = "export"


class TransportMode(str, Enum):
    ROAD = "road"
    SEA = "sea"
    AIR = "air"
    RAIL = "rail"
    MULTIMODAL = "multimodal"


class Scope(str, Enum):
    """GHG Protocol coverage reached by a calculation.

    Upgrades are driven by data completeness, not by the size of each component.
    """
    SCOPE1 = "scope1"
    SCOPE1_2 = "scope1_2"
    SCOPE1_2_3 = "scope1_2_3"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# attribute -> camelCase key used by the API layer and the import template
WIRE_KEYS: dict[str, str] = {
    "sku": "sku",
    "product_name": "productName",
    "product_type": "productType",
    "quantity": "quantity",
    "weight_per_unit": "weightPerUnit",
    "primary_material": "primaryMaterial",
    "primary_material_percentage": "primaryMaterialPercentage",
    "secondary_material": "secondaryMaterial",
    "secondary_material_percentage": "secondaryMaterialPercentage",
    "accessories": "accessories",
    "material_source": "materialSource",
    "processes": "processes",
    "energy_source": "energySource",
    "market_type": "marketType",
    "export_country": "exportCountry",
    "transport_mode": "transportMode",
    "source_row": "sourceRow",
    "calculated_co2": "calculatedCO2",
    "scope": "scope",
    "confidence_level": "confidenceLevel",
}


@dataclass(frozen=True)
class BulkProductRow:
    """One canonical product row of a bulk import.

    Codes (product_type, materials, material_source, processes, energy_source,
    market_type, export_country, transport_mode) are canonical dictionary codes.
    weight_per_unit is in grams. The calculated trio stays None until
    calculate_bulk_carbon() returns an annotated copy.
    """
    sku: str
    product_name: str
    product_type: str
    quantity: int
    weight_per_unit: float  # grams
    primary_material: str
    primary_material_percentage: float
    material_source: str
    processes: tuple[str, ...]
    energy_source: str
    market_type: str
    transport_mode: str
    secondary_material: str | None = None
    secondary_material_percentage: float | None = None
    accessories: str | None = None
    export_country: str | None = None
    source_row: int = 0  # 1-based spreadsheet row (header = 1)
    calculated_co2: float | None = None
    scope: Scope | None = None
    confidence_level: ConfidenceLevel | None = None

    @property
    def is_calculated(self) -> bool:
        return self.calculated_co2 is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping unset optional fields."""
        out: dict[str, Any] = {}
        for attr, key in WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            out[key] = value
        return out
