from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from ..normalization.schema import TEMPLATE_COLUMNS, template_headers

"""Downloadable bulk import template.

The workbook has three sheets: the data sheet (header row plus three example
products), usage instructions and the list of accepted values. The CSV variant
only carries the data sheet, written with a UTF-8 BOM so Excel detects the encoding.
"""

__all__ = [
    "DATA_SHEET",
    "INSTRUCTIONS_SHEET",
    "OPTIONS_SHEET",
    "SAMPLE_ROWS",
    "default_template_name",
    "template_frame",
    "write_template",
]

DATA_SHEET = "Dữ liệu sản phẩm"
INSTRUCTIONS_SHEET = "Hướng dẫn"
OPTIONS_SHEET = "Danh sách lựa chọn"

SAMPLE_ROWS: tuple[dict[str, object], ...] = (
    {
        "sku": "SKU-001",
        "productName": "Áo T-shirt Organic Cotton",
        "productType": "Áo thun",
        "quantity": 1000,
        "weightPerUnit": 250,
        "primaryMaterial": "Cotton hữu cơ",
        "primaryMaterialPercentage": 100,
        "accessories": "Nhãn, Chỉ may",
        "materialSource": "Trong nước",
        "processes": "Dệt kim, Cắt may",
        "energySource": "Điện lưới",
        "marketType": "Xuất khẩu",
        "exportCountry": "EU (Châu Âu)",
        "transportMode": "Đường biển",
    },
    {
        "sku": "SKU-002",
        "productName": "Quần Jeans Recycled Denim",
        "productType": "Quần",
        "quantity": 500,
        "weightPerUnit": 450,
        "primaryMaterial": "Polyester tái chế",
        "primaryMaterialPercentage": 80,
        "secondaryMaterial": "Cotton",
        "secondaryMaterialPercentage": 20,
        "accessories": "Nút, Khoá kéo, Rivets",
        "materialSource": "Nhập khẩu",
        "processes": "Dệt thoi, Cắt may, Nhuộm",
        "energySource": "Hỗn hợp",
        "marketType": "Xuất khẩu",
        "exportCountry": "Mỹ",
        "transportMode": "Đường biển",
    },
    {
        "sku": "SKU-003",
        "productName": "Túi Tote Canvas",
        "productType": "Túi",
        "quantity": 2000,
        "weightPerUnit": 180,
        "primaryMaterial": "Cotton",
        "primaryMaterialPercentage": 100,
        "accessories": "Quai, Khoá",
        "materialSource": "Trong nước",
        "processes": "Cắt may, In",
        "energySource": "Điện mặt trời",
        "marketType": "Nội địa",
        "transportMode": "Đường bộ",
    },
)

_INSTRUCTIONS = (
    "HƯỚNG DẪN SỬ DỤNG FILE MẪU",
    "",
    "1. NHÓM A - THÔNG TIN SKU CƠ BẢN",
    "   - Mã SKU: Mã duy nhất cho sản phẩm (bắt buộc)",
    "   - Tên sản phẩm: Tên đầy đủ của sản phẩm (bắt buộc)",
    "   - Loại sản phẩm: Chọn từ danh sách có sẵn (bắt buộc)",
    "   - Số lượng: Số lượng sản xuất (bắt buộc)",
    "   - Trọng lượng: Trọng lượng trung bình mỗi sản phẩm tính bằng gram (bắt buộc)",
    "",
    "2. NHÓM B - NGUYÊN VẬT LIỆU",
    "   - Vải chính: Loại vải/nguyên liệu chính (bắt buộc)",
    "   - Tỷ lệ vải chính: Phần trăm vải chính trong sản phẩm (bắt buộc)",
    "   - Vải phụ: Loại vải/nguyên liệu phụ (tùy chọn)",
    "   - Tỷ lệ vải phụ: Phần trăm vải phụ (tùy chọn)",
    "   - Phụ liệu: Nút, khoá kéo, chỉ may, v.v. (tùy chọn)",
    "   - Nguồn nguyên liệu: Trong nước / Nhập khẩu / Không xác định (bắt buộc)",
    "",
    "3. NHÓM C - QUY TRÌNH SẢN XUẤT",
    "   - Công đoạn: Liệt kê các công đoạn, cách nhau bằng dấu phẩy (bắt buộc)",
    "   - Nguồn năng lượng: Điện lưới / Điện mặt trời / Than đá / Hỗn hợp (bắt buộc)",
    "",
    "4. NHÓM D - XUẤT KHẨU & VẬN CHUYỂN",
    "   - Thị trường: Nội địa hoặc Xuất khẩu (bắt buộc)",
    "   - Quốc gia xuất khẩu: Nếu xuất khẩu, chọn quốc gia/khu vực",
    "   - Hình thức vận chuyển: Đường bộ / biển / hàng không / sắt (bắt buộc)",
    "",
    "LƯU Ý:",
    "   - Các trường có dấu * là bắt buộc",
    f'   - Tham khảo sheet "{OPTIONS_SHEET}" để xem các giá trị hợp lệ',
    "   - File mẫu có 3 dòng dữ liệu ví dụ, hãy xóa trước khi nhập liệu",
)


def default_template_name(fmt: str = "xlsx", today: date | None = None) -> str:
    """WeaveCarbon_Template_YYYY-MM-DD.<fmt>"""
    today = today or date.today()
    return f"WeaveCarbon_Template_{today.isoformat()}.{fmt}"


def template_frame() -> pd.DataFrame:
    """Data sheet contents: template headers and the example rows ("" for unset cells)."""
    records = [[row.get(c.key, "") for c in TEMPLATE_COLUMNS] for row in SAMPLE_ROWS]
    return pd.DataFrame(records, columns=template_headers())


def _options_frame() -> pd.DataFrame:
    rows: list[list[str]] = [["DANH SÁCH GIÁ TRỊ HỢP LỆ", ""]]
    for column in TEMPLATE_COLUMNS:
        if column.options:
            rows.append(["", ""])
            rows.append([f"{column.label}:", column.options])
    return pd.DataFrame(rows)


def write_template(path: Path, fmt: str = "xlsx") -> Path:
    """Write the import template to `path` and return it.

    fmt is "xlsx" (three sheets) or "csv" (data sheet only).
    """
    if fmt not in ("xlsx", "csv"):
        raise ValueError(f"unsupported template format: {fmt}")
    path.parent.mkdir(parents=True, exist_ok=True)
    data = template_frame()

    if fmt == "csv":
        data.to_csv(path, index=False, encoding="utf-8-sig")
        return path

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        data.to_excel(writer, sheet_name=DATA_SHEET, index=False)
        sheet = writer.sheets[DATA_SHEET]
        for idx, column in enumerate(TEMPLATE_COLUMNS, start=1):
            sheet.column_dimensions[get_column_letter(idx)].width = column.width

        pd.DataFrame(list(_INSTRUCTIONS)).to_excel(writer, sheet_name=INSTRUCTIONS_SHEET, index=False, header=False)
        writer.sheets[INSTRUCTIONS_SHEET].column_dimensions["A"].width = 80

        _options_frame().to_excel(writer, sheet_name=OPTIONS_SHEET, index=False, header=False)
        options = writer.sheets[OPTIONS_SHEET]
        options.column_dimensions["A"].width = 25
        options.column_dimensions["B"].width = 80
    return path
