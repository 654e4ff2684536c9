from __future__ import annotations

from dataclasses import dataclass

"""Bulk import template schema.

Column order here is the column order of the downloadable template. Headers are the
Vietnamese labels users see; a trailing " *" marks required columns.
"""

__all__ = [
    "TemplateColumn",
    "TEMPLATE_COLUMNS",
    "REQUIRED_FIELDS",
    "COLUMN_BY_KEY",
    "template_headers",
]


@dataclass(frozen=True)
class TemplateColumn:
    key: str
    header: str
    label_en: str
    width: int
    required: bool
    example: str
    options: str | None = None

    @property
    def label(self) -> str:
        return self.header.removesuffix(" *")


TEMPLATE_COLUMNS: tuple[TemplateColumn, ...] = (
    # Group A - basic SKU info
    TemplateColumn("sku", "Mã SKU *", "SKU", 15, True, "SKU-001"),
    TemplateColumn("productName", "Tên sản phẩm *", "Product name", 25, True, "Áo T-shirt Cotton"),
    TemplateColumn(
        "productType", "Loại sản phẩm *", "Product type", 15, True, "Áo thun",
        "Áo thun, Quần, Váy/Đầm, Áo khoác, Giày, Túi, Phụ kiện, Khác",
    ),
    TemplateColumn("quantity", "Số lượng *", "Quantity", 12, True, "1000"),
    TemplateColumn("weightPerUnit", "Trọng lượng (gram) *", "Weight per unit (g)", 18, True, "250"),
    # Group B - materials
    TemplateColumn(
        "primaryMaterial", "Vải chính *", "Primary material", 20, True, "Cotton",
        "Cotton, Polyester, Nylon, Len, Lụa, Linen, Polyester tái chế, Cotton hữu cơ, Bamboo, Hemp, Pha trộn",
    ),
    TemplateColumn(
        "primaryMaterialPercentage", "Tỷ lệ vải chính (%) *", "Primary material percentage", 18, True, "100",
    ),
    TemplateColumn("secondaryMaterial", "Vải phụ", "Secondary material", 20, False, "Polyester"),
    TemplateColumn(
        "secondaryMaterialPercentage", "Tỷ lệ vải phụ (%)", "Secondary material percentage", 18, False, "0",
    ),
    TemplateColumn("accessories", "Phụ liệu", "Accessories", 25, False, "Nút, Khoá kéo"),
    TemplateColumn(
        "materialSource", "Nguồn nguyên liệu *", "Material source", 18, True, "Trong nước",
        "Trong nước, Nhập khẩu, Không xác định",
    ),
    # Group C - manufacturing
    TemplateColumn(
        "processes", "Công đoạn sản xuất *", "Processes", 30, True, "Dệt kim, Cắt may, Nhuộm",
        "Dệt kim, Dệt thoi, Cắt may, Nhuộm, In, Hoàn tất",
    ),
    TemplateColumn(
        "energySource", "Nguồn năng lượng *", "Energy source", 18, True, "Điện lưới",
        "Điện lưới, Điện mặt trời, Than đá, Hỗn hợp",
    ),
    # Group D - export & transport
    TemplateColumn("marketType", "Thị trường *", "Market", 15, True, "Xuất khẩu", "Nội địa, Xuất khẩu"),
    TemplateColumn(
        "exportCountry", "Quốc gia xuất khẩu", "Export country", 20, False, "EU (Châu Âu)",
        "EU (Châu Âu), Mỹ, Nhật Bản, Hàn Quốc, Khác",
    ),
    TemplateColumn(
        "transportMode", "Hình thức vận chuyển *", "Transport mode", 20, True, "Đường biển",
        "Đường bộ, Đường biển, Đường hàng không, Đường sắt, Đa phương thức",
    ),
)

COLUMN_BY_KEY: dict[str, TemplateColumn] = {c.key: c for c in TEMPLATE_COLUMNS}

REQUIRED_FIELDS: tuple[str, ...] = tuple(c.key for c in TEMPLATE_COLUMNS if c.required)


def template_headers() -> list[str]:
    """Header row of the import template, in column order."""
    return [c.header for c in TEMPLATE_COLUMNS]
