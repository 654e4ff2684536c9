from __future__ import annotations

from types import MappingProxyType

"""Static emission factor tables (kg CO2e).

Loaded once at import and exposed read-only. Keys are canonical codes from
weavecarbon.normalization.dictionaries.
"""

# --- bulk import engine -------------------------------------------------------

# kg CO2e per kg of fibre
MATERIAL_FACTORS = MappingProxyType({
    "cotton": 8.0,
    "polyester": 5.5,
    "nylon": 6.8,
    "wool": 10.1,
    "silk": 7.5,
    "linen": 5.2,
    "recycled_polyester": 2.5,
    "organic_cotton": 4.5,
    "bamboo": 3.8,
    "hemp": 2.9,
    "blend": 5.5,
})
DEFAULT_MATERIAL_FACTOR = 5.5

MATERIAL_SOURCE_FACTORS = MappingProxyType({
    "domestic": 0.8,
    "imported": 1.2,
    "unknown": 1.0,  # proxy
})
DEFAULT_MATERIAL_SOURCE_FACTOR = 1.0

# multiplier on the process total
ENERGY_FACTORS = MappingProxyType({
    "grid": 1.0,
    "solar": 0.4,
    "coal": 1.5,
    "mixed": 0.7,
})
DEFAULT_ENERGY_FACTOR = 1.0

# kg CO2e per kg of product, summed over the declared processes
PROCESS_FACTORS = MappingProxyType({
    "knitting": 0.8,
    "weaving": 1.0,
    "cutting_sewing": 0.3,
    "dyeing": 1.5,
    "printing": 0.6,
    "finishing": 0.4,
})
DEFAULT_PROCESS_FACTOR = 0.5

TRANSPORT_FACTORS = MappingProxyType({
    "road": 0.089,
    "sea": 0.016,
    "air": 0.602,
    "rail": 0.028,
    "multimodal": 0.05,
})
DEFAULT_TRANSPORT_FACTOR = 0.05

# km from the factory to the market
MARKET_DISTANCES = MappingProxyType({
    "domestic": 500,
    "eu": 10000,
    "us": 14000,
    "jp": 3500,
    "kr": 3200,
    "other": 8000,
})
DEFAULT_MARKET_DISTANCE = 8000

# --- step-wise assessment -----------------------------------------------------

ASSESSMENT_MATERIAL_FACTORS = MappingProxyType({
    "cotton": 8.0,
    "organic_cotton": 4.5,
    "polyester": 5.5,
    "recycled_polyester": 2.5,
    "wool": 10.1,
    "silk": 7.5,
    "linen": 5.2,
    "nylon": 6.8,
    "bamboo": 3.8,
    "hemp": 2.9,
    "viscose": 4.2,
    "tencel": 3.5,
    "blend": 6.0,
})
PROXY_MATERIAL_FACTOR = 6.0

ASSESSMENT_PROCESS_FACTORS = MappingProxyType({
    "knitting": 1.2,
    "weaving": 1.5,
    "cutting_sewing": 0.8,
    "dyeing": 2.5,
    "printing": 1.8,
    "finishing": 0.5,
})
PROXY_PROCESS_FACTOR = 1.0
PROXY_PROCESS = "cutting_sewing"

ASSESSMENT_ENERGY_FACTORS = MappingProxyType({
    "grid": 1.0,
    "solar": 0.05,
    "wind": 0.03,
    "coal": 2.2,
    "gas": 0.5,
    "mixed": 0.7,
})
PROXY_ENERGY_SOURCE = "grid"
KWH_PER_KG = 2.0  # assumed electricity use per kg of product

ASSESSMENT_TRANSPORT_FACTORS = MappingProxyType({
    "road": 0.089,
    "sea": 0.016,
    "air": 0.602,
    "rail": 0.028,
})
PROXY_TRANSPORT_MODE = "sea"

DESTINATION_DISTANCES = MappingProxyType({
    "vietnam": 500,
    "domestic": 500,
    "usa": 14000,
    "us": 14000,
    "korea": 3200,
    "kr": 3200,
    "japan": 3500,
    "jp": 3500,
    "eu": 10000,
    "china": 2500,
    "other": 5000,
})
DEFAULT_DESTINATION_DISTANCE = 5000

# share of manufacturing emissions booked as direct (scope 1); the rest is scope 3
DIRECT_MANUFACTURING_SHARE = 0.3
