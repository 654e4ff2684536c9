from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType

from ..models.assessment import MaterialInput
from ..normalization.tokens import normalize_token
from .factors import PROXY_MATERIAL_FACTOR

"""Material catalog used by the step-wise assessment.

A static list of fabrics, trims, accessories and packaging with their emission
factor and default data quality. Entries are looked up by id; when a material is
not in the catalog the assessment falls back to type codes or proxy factors.
"""

__all__ = [
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

MATERIAL_TYPES = ("fabric", "trim", "accessory", "packaging")
DATA_QUALITIES = ("primary", "secondary", "proxy")


@dataclass(frozen=True)
class CatalogMaterial:
    id: str
    name_vi: str
    name_en: str
    material_type: str  # fabric | trim | accessory | packaging
    family: str
    co2_factor: float  # kg CO2e / kg
    data_quality: str = "secondary"  # primary | secondary | proxy
    is_recycled: bool = False
    status: str = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"


def _m(id: str, name_vi: str, name_en: str, material_type: str, family: str,
       co2_factor: float, data_quality: str, is_recycled: bool = False) -> CatalogMaterial:
    return CatalogMaterial(id, name_vi, name_en, material_type, family, co2_factor, data_quality, is_recycled)


MATERIAL_CATALOG: tuple[CatalogMaterial, ...] = (
    # fabrics
    _m("cat-cotton-100", "Cotton 100%", "100% Cotton", "fabric", "cotton", 8.0, "primary"),
    _m("cat-cotton-organic", "Cotton hữu cơ", "Organic Cotton", "fabric", "cotton", 4.5, "primary"),
    _m("cat-cotton-recycled", "Cotton tái chế", "Recycled Cotton", "fabric", "cotton", 3.2, "secondary", True),
    _m("cat-polyester-100", "Polyester 100%", "100% Polyester", "fabric", "polyester", 5.5, "primary"),
    _m("cat-polyester-recycled", "Polyester tái chế (rPET)", "Recycled Polyester (rPET)",
       "fabric", "polyester", 2.5, "primary", True),
    _m("cat-wool-100", "Len 100%", "100% Wool", "fabric", "wool", 10.1, "primary"),
    _m("cat-wool-merino", "Len Merino", "Merino Wool", "fabric", "wool", 11.5, "primary"),
    _m("cat-silk-100", "Lụa 100%", "100% Silk", "fabric", "silk", 7.5, "secondary"),
    _m("cat-linen-100", "Lanh 100%", "100% Linen", "fabric", "linen", 5.2, "primary"),
    _m("cat-nylon-100", "Nylon 100%", "100% Nylon", "fabric", "nylon", 6.8, "primary"),
    _m("cat-nylon-recycled", "Nylon tái chế", "Recycled Nylon", "fabric", "nylon", 3.5, "secondary", True),
    _m("cat-bamboo", "Vải Bamboo", "Bamboo Fabric", "fabric", "bamboo", 3.8, "secondary"),
    _m("cat-hemp", "Vải Gai dầu", "Hemp Fabric", "fabric", "hemp", 2.9, "secondary"),
    _m("cat-tencel", "Tencel/Lyocell", "Tencel/Lyocell", "fabric", "tencel", 3.5, "primary"),
    _m("cat-viscose", "Viscose/Rayon", "Viscose/Rayon", "fabric", "viscose", 4.2, "secondary"),
    _m("cat-acrylic", "Acrylic", "Acrylic", "fabric", "acrylic", 5.0, "secondary"),
    _m("cat-leather-genuine", "Da thật", "Genuine Leather", "fabric", "leather", 17.0, "secondary"),
    _m("cat-leather-faux", "Da giả/PU", "Faux Leather/PU", "fabric", "plastic", 7.0, "secondary"),
    _m("cat-down", "Lông vũ/Down", "Down Feather", "fabric", "down", 15.0, "proxy"),
    _m("cat-faux-fur", "Lông giả", "Faux Fur", "fabric", "fur", 8.5, "proxy"),
    _m("cat-canvas-cotton", "Vải Canvas (Cotton)", "Cotton Canvas", "fabric", "canvas", 9.0, "secondary"),
    _m("cat-blend-cotton-poly", "Vải pha Cotton/Polyester", "Cotton/Polyester Blend",
       "fabric", "mixed", 6.5, "secondary"),
    _m("cat-blend-wool-poly", "Vải pha Len/Polyester", "Wool/Polyester Blend", "fabric", "mixed", 7.5, "secondary"),
    # trims
    _m("cat-zipper-metal", "Khóa kéo kim loại", "Metal Zipper", "trim", "metal", 12.0, "secondary"),
    _m("cat-zipper-plastic", "Khóa kéo nhựa", "Plastic Zipper", "trim", "plastic", 4.0, "secondary"),
    _m("cat-zipper-nylon", "Khóa kéo nylon", "Nylon Zipper", "trim", "nylon", 5.0, "secondary"),
    _m("cat-button-plastic", "Nút nhựa", "Plastic Button", "trim", "plastic", 3.5, "secondary"),
    _m("cat-button-metal", "Nút kim loại", "Metal Button", "trim", "metal", 10.0, "secondary"),
    _m("cat-button-wood", "Nút gỗ", "Wood Button", "trim", "other", 1.5, "proxy"),
    _m("cat-button-shell", "Nút xà cừ/vỏ sò", "Shell Button", "trim", "other", 2.0, "proxy"),
    # accessories
    _m("cat-thread-polyester", "Chỉ may Polyester", "Polyester Thread", "accessory", "polyester", 5.0, "proxy"),
    _m("cat-thread-cotton", "Chỉ may Cotton", "Cotton Thread", "accessory", "cotton", 7.0, "proxy"),
    _m("cat-elastic-band", "Thun co giãn", "Elastic Band", "accessory", "elastane", 6.0, "proxy"),
    _m("cat-label-woven", "Nhãn dệt", "Woven Label", "accessory", "polyester", 4.0, "proxy"),
    _m("cat-label-printed", "Nhãn in", "Printed Label", "accessory", "paper", 2.0, "proxy"),
    _m("cat-lining-polyester", "Vải lót Polyester", "Polyester Lining", "accessory", "polyester", 5.0, "secondary"),
    _m("cat-padding-polyester", "Đệm/Mút Polyester", "Polyester Padding", "accessory", "polyester", 6.0, "secondary"),
    # packaging
    _m("cat-packaging-plastic-bag", "Túi nhựa PE", "PE Plastic Bag", "packaging", "plastic", 3.0, "secondary"),
    _m("cat-packaging-paper-box", "Hộp giấy", "Paper Box", "packaging", "paper", 1.5, "secondary"),
    # generic proxy
    _m("cat-other-generic", "Vật liệu khác (Proxy)", "Other Material (Proxy)", "fabric", "other", 6.0, "proxy"),
)

_CATALOG_BY_ID = MappingProxyType({m.id: m for m in MATERIAL_CATALOG})

# default factor by typical application when neither catalog id nor family is known
_APPLICATION_DEFAULTS = MappingProxyType({
    "body_fabric": 6.0,
    "lining": 5.0,
    "trim": 5.0,
    "zipper": 6.0,
    "button": 4.0,
    "thread": 5.5,
    "label": 3.0,
    "elastic": 6.0,
    "padding": 6.0,
    "packaging": 2.5,
})

_WELFARE_FAMILIES = ("leather", "down", "fur")
METAL_SHARE_WARNING = 5.0  # percent
LOW_MATERIAL_CONFIDENCE = 0.5


def get_material_by_id(material_id: str | None) -> CatalogMaterial | None:
    if not material_id:
        return None
    return _CATALOG_BY_ID.get(material_id)


def search_material_catalog(query: str, material_type: str | None = None, limit: int = 10) -> list[CatalogMaterial]:
    """Active materials whose Vietnamese/English name or family contains `query`.

    Matching is diacritic- and case-insensitive ("lua" finds "Lụa 100%").
    """
    needle = normalize_token(query)
    hits: list[CatalogMaterial] = []
    for m in MATERIAL_CATALOG:
        if not m.is_active or (material_type and m.material_type != material_type):
            continue
        haystacks = (normalize_token(m.name_vi), normalize_token(m.name_en), m.family)
        if any(needle in h for h in haystacks):
            hits.append(m)
            if len(hits) >= limit:
                break
    return hits


def get_materials_by_type(material_type: str) -> list[CatalogMaterial]:
    return [m for m in MATERIAL_CATALOG if m.material_type == material_type and m.is_active]


def get_materials_by_family(family: str) -> list[CatalogMaterial]:
    return [m for m in MATERIAL_CATALOG if m.family == family and m.is_active]


def get_proxy_emission_factor(family: str | None = None, application: str | None = None) -> float:
    """Fallback factor: family average, else application default, else the generic proxy."""
    if family:
        members = get_materials_by_family(family)
        if members:
            return sum(m.co2_factor for m in members) / len(members)
    return _APPLICATION_DEFAULTS.get(application or "body_fabric", PROXY_MATERIAL_FACTOR)


def get_material_warnings(materials: Iterable[MaterialInput], confidence: dict[str, float] | None = None) -> list[str]:
    """Advisory notes for a material list (deduplicated, first-seen order).

    Args:
        materials: wizard material entries
        confidence: optional material id -> 0..1 match confidence for user-supplied entries
    """
    warnings: list[str] = []
    confidence = confidence or {}
    for m in materials:
        catalog_material = get_material_by_id(m.catalog_material_id)
        if catalog_material is not None:
            if catalog_material.family in _WELFARE_FAMILIES:
                warnings.append(
                    f'Material "{catalog_material.name_en}" may require an animal-welfare certification'
                )
            if catalog_material.family == "metal" and m.percentage > METAL_SHARE_WARNING:
                warnings.append(
                    f"Metal trim ({catalog_material.name_en}) is a large share of the product "
                    f"and can dominate its footprint"
                )
        if m.user_source == "user_other" and confidence.get(m.id, 0.0) < LOW_MATERIAL_CONFIDENCE:
            warnings.append(f'Material "{m.custom_name or "Other"}" uses a low-confidence proxy factor')
    return list(dict.fromkeys(warnings))


def calculate_material_confidence(materials: Iterable[MaterialInput], confidence: dict[str, float]) -> float:
    """Percentage-weighted match confidence (0..1) of a material list, 2 decimals."""
    materials = list(materials)
    if not materials:
        return 0.0
    weighted = sum(confidence.get(m.id, 0.0) * (m.percentage / 100) for m in materials)
    return round(weighted, 2)
