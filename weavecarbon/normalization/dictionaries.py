from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .schema import TEMPLATE_COLUMNS
from .tokens import normalize_token

"""Canonicalization dictionaries.

Each semantic domain is declared as {canonical code: [spellings...]} and compiled
once, at import time, into a read-only {normalization key: code} mapping. The code
itself is always accepted as a spelling of itself.
"""

__all__ = [
    "build_dictionary",
    "PRODUCT_TYPE_MAP",
    "MATERIAL_MAP",
    "MATERIAL_SOURCE_MAP",
    "PROCESS_MAP",
    "ENERGY_SOURCE_MAP",
    "MARKET_TYPE_MAP",
    "EXPORT_COUNTRY_MAP",
    "TRANSPORT_MODE_MAP",
    "HEADER_MAP",
    "PRODUCT_TYPES",
    "MATERIAL_CODES",
    "PROCESS_CODES",
    "EXPORT_COUNTRIES",
]


def build_dictionary(aliases: Mapping[str, Iterable[str]]) -> Mapping[str, str]:
    """Compile an alias table into a frozen normalization-key -> code mapping.

    Raises:
        ValueError: if two codes claim the same normalized spelling
    """
    table: dict[str, str] = {}
    for code, spellings in aliases.items():
        for spelling in (code, *spellings):
            key = normalize_token(spelling)
            if not key:
                continue
            existing = table.get(key)
            if existing is not None and existing != code:
                raise ValueError(f"alias '{spelling}' maps to both '{existing}' and '{code}'")
            table[key] = code
    return MappingProxyType(table)


_PRODUCT_TYPE_ALIASES: dict[str, list[str]] = {
    "tshirt": ["Áo thun", "t-shirt", "tee", "áo phông", "polo", "áo polo", "shirt", "áo sơ mi", "sơ mi"],
    "pants": ["Quần", "quần dài", "trousers", "jeans", "quần jeans", "shorts", "quần short"],
    "dress": ["Váy/Đầm", "váy", "đầm", "skirt", "chân váy"],
    "jacket": ["Áo khoác", "coat", "sweater", "áo len", "hoodie"],
    "shoes": ["Giày", "footwear", "sandals", "dép", "dép/sandal"],
    "bag": ["Túi", "túi xách", "handbag", "tote"],
    "accessories": ["Phụ kiện", "accessory"],
    "other": ["Khác"],
}

_MATERIAL_ALIASES: dict[str, list[str]] = {
    "cotton": ["Cotton 100%", "100% cotton", "bông", "vải bông"],
    "organic_cotton": ["Cotton hữu cơ", "organic cotton", "bông hữu cơ"],
    "recycled_polyester": ["Polyester tái chế", "recycled polyester", "rpet", "polyester tái chế (rpet)"],
    "polyester": ["Polyester 100%", "100% polyester", "poly"],
    "nylon": ["Nylon 100%", "polyamide"],
    "wool": ["Len", "len 100%", "merino", "len merino"],
    "silk": ["Lụa", "lụa 100%", "tơ tằm"],
    "linen": ["Lanh", "vải lanh", "lanh 100%"],
    "bamboo": ["Tre", "vải tre", "vải bamboo", "sợi tre"],
    "hemp": ["Gai dầu", "vải gai dầu", "gai"],
    "blend": ["Pha trộn", "vải pha", "mixed", "hỗn hợp"],
}

_MATERIAL_SOURCE_ALIASES: dict[str, list[str]] = {
    "domestic": ["Trong nước", "nội địa", "local", "việt nam", "vietnam"],
    "imported": ["Nhập khẩu", "import", "nước ngoài"],
    "unknown": ["Không xác định", "không rõ", "n/a", "chưa rõ"],
}

_PROCESS_ALIASES: dict[str, list[str]] = {
    "knitting": ["Dệt kim", "knit"],
    "weaving": ["Dệt thoi", "weave", "dệt"],
    "cutting_sewing": ["Cắt may", "cutting", "sewing", "cut & sew", "cut and sew", "may", "cắt"],
    "dyeing": ["Nhuộm", "dye"],
    "printing": ["In", "in ấn", "print"],
    "finishing": ["Hoàn tất", "hoàn thiện", "finish"],
}

_ENERGY_SOURCE_ALIASES: dict[str, list[str]] = {
    "grid": ["Điện lưới", "điện", "evn", "grid electricity"],
    "solar": ["Điện mặt trời", "năng lượng mặt trời", "solar pv"],
    "coal": ["Than đá", "than", "coal boiler"],
    "mixed": ["Hỗn hợp", "mix"],
}

_MARKET_TYPE_ALIASES: dict[str, list[str]] = {
    "domestic": ["Nội địa", "trong nước", "local"],
    "export": ["Xuất khẩu", "xk", "international"],
}

_EXPORT_COUNTRY_ALIASES: dict[str, list[str]] = {
    "eu": ["EU (Châu Âu)", "châu âu", "europe", "european union"],
    "us": ["Mỹ", "usa", "hoa kỳ", "united states"],
    "jp": ["Nhật Bản", "nhật", "japan"],
    "kr": ["Hàn Quốc", "hàn", "korea", "south korea"],
    "other": ["Khác"],
}

_TRANSPORT_MODE_ALIASES: dict[str, list[str]] = {
    "road": ["Đường bộ", "truck", "xe tải"],
    "sea": ["Đường biển", "ocean", "tàu biển", "sea freight"],
    "air": ["Đường hàng không", "hàng không", "air freight", "máy bay"],
    "rail": ["Đường sắt", "train", "tàu hỏa"],
    "multimodal": ["Đa phương thức", "multi-modal", "intermodal"],
}

# spellings seen in customer files that are not the template header or label
_HEADER_EXTRA_ALIASES: dict[str, list[str]] = {
    "sku": ["mã sản phẩm", "product code", "code", "mã"],
    "productName": ["tên", "name", "product", "tên hàng"],
    "productType": ["loại", "type", "category", "danh mục"],
    "quantity": ["qty", "sl", "số lượng sản xuất"],
    "weightPerUnit": ["trọng lượng", "khối lượng", "weight", "weight (g)", "weight (gram)", "khối lượng (g)"],
    "primaryMaterial": ["chất liệu chính", "material", "main material", "vải"],
    "primaryMaterialPercentage": ["tỷ lệ chính", "primary pct", "primary share"],
    "secondaryMaterial": ["chất liệu phụ", "second material"],
    "secondaryMaterialPercentage": ["tỷ lệ phụ", "secondary pct", "secondary share"],
    "accessories": ["phụ kiện đi kèm", "trims"],
    "materialSource": ["nguồn vật liệu", "xuất xứ nguyên liệu", "source"],
    "processes": ["công đoạn", "quy trình sản xuất", "quy trình", "process"],
    "energySource": ["năng lượng", "energy", "nguồn điện"],
    "marketType": ["market type", "loại thị trường"],
    "exportCountry": ["quốc gia", "nước xuất khẩu", "destination", "thị trường xuất khẩu", "country"],
    "transportMode": ["vận chuyển", "phương thức vận chuyển", "transport", "shipping mode"],
}


def _header_aliases() -> dict[str, list[str]]:
    aliases: dict[str, list[str]] = {}
    for col in TEMPLATE_COLUMNS:
        aliases[col.key] = [col.header, col.label, col.label_en, *_HEADER_EXTRA_ALIASES.get(col.key, [])]
    return aliases


PRODUCT_TYPE_MAP = build_dictionary(_PRODUCT_TYPE_ALIASES)
MATERIAL_MAP = build_dictionary(_MATERIAL_ALIASES)
MATERIAL_SOURCE_MAP = build_dictionary(_MATERIAL_SOURCE_ALIASES)
PROCESS_MAP = build_dictionary(_PROCESS_ALIASES)
ENERGY_SOURCE_MAP = build_dictionary(_ENERGY_SOURCE_ALIASES)
MARKET_TYPE_MAP = build_dictionary(_MARKET_TYPE_ALIASES)
EXPORT_COUNTRY_MAP = build_dictionary(_EXPORT_COUNTRY_ALIASES)
TRANSPORT_MODE_MAP = build_dictionary(_TRANSPORT_MODE_ALIASES)
HEADER_MAP = build_dictionary(_header_aliases())

PRODUCT_TYPES: tuple[str, ...] = tuple(_PRODUCT_TYPE_ALIASES)
MATERIAL_CODES: tuple[str, ...] = tuple(_MATERIAL_ALIASES)
PROCESS_CODES: tuple[str, ...] = tuple(_PROCESS_ALIASES)
EXPORT_COUNTRIES: tuple[str, ...] = tuple(_EXPORT_COUNTRY_ALIASES)
