"""Header / value normalization for bulk product imports."""

from .dictionaries import (
    ENERGY_SOURCE_MAP,
    EXPORT_COUNTRY_MAP,
    HEADER_MAP,
    MARKET_TYPE_MAP,
    MATERIAL_MAP,
    MATERIAL_SOURCE_MAP,
    PROCESS_MAP,
    PRODUCT_TYPE_MAP,
    TRANSPORT_MODE_MAP,
)
from .mapper import (
    is_blank,
    map_header,
    map_row,
    map_value,
    parse_accessories,
    parse_processes,
    to_float,
    to_int,
)
from .schema import REQUIRED_FIELDS, TEMPLATE_COLUMNS, TemplateColumn, template_headers
from .tokens import normalize_token, slugify, to_text

__all__ = [
    "normalize_token",
    "slugify",
    "to_text",
    "is_blank",
    "map_value",
    "map_header",
    "map_row",
    "parse_processes",
    "parse_accessories",
    "to_int",
    "to_float",
    "TemplateColumn",
    "TEMPLATE_COLUMNS",
    "REQUIRED_FIELDS",
    "template_headers",
    "PRODUCT_TYPE_MAP",
    "MATERIAL_MAP",
    "MATERIAL_SOURCE_MAP",
    "PROCESS_MAP",
    "ENERGY_SOURCE_MAP",
    "MARKET_TYPE_MAP",
    "EXPORT_COUNTRY_MAP",
    "TRANSPORT_MODE_MAP",
    "HEADER_MAP",
]
