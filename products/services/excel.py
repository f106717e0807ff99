# products/services/excel.py

"""
PRODUCT SPREADSHEETS (openpyxl)

Purpose:
- Bulk import of the price list (upsert by product code)
- Export of the full catalog in the same column layout
- Blank template with one sample row

Column layout (first sheet, header row skipped):
    Product Code | Product Name | Category | User For | MRP | Discount % |
    Final Rate | Stock | Description | Content

Rules:
- Rows with fewer than 8 filled columns are row errors, not fatal
- Missing code or name is a row error
- Unknown categories are created on the fly
- Each row is written in its own savepoint; one bad row never
  rolls back the good ones
"""

from __future__ import annotations

import io
import logging
import zipfile
from decimal import Decimal

from django.db import transaction
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.exceptions import InvalidFileException

from products.models import Category, Product
from products.services.exceptions import ImportFileError
from products.services.pricing import compute_final_rate, money, parse_decimal

logger = logging.getLogger(__name__)

COLUMNS = [
    "Product Code",
    "Product Name",
    "Category",
    "User For",
    "MRP",
    "Discount %",
    "Final Rate",
    "Stock",
    "Description",
    "Content",
]

MIN_COLUMNS = 8

COLUMN_WIDTHS = {
    "A": 16,
    "B": 40,
    "C": 22,
    "D": 12,
    "E": 12,
    "F": 12,
    "G": 12,
    "H": 10,
    "I": 45,
    "J": 18,
}

SAMPLE_ROW = [
    "H001",
    "Sample Cracker",
    "Fancy Crackers",
    "Family",
    500,
    90,
    50,
    1000,
    "Sample description",
    "Pack of 5",
]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# =====================================================
# IMPORT
# =====================================================

def _cell_text(v) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v).strip()


def _trim_row(values) -> list:
    row = list(values or [])
    while row and (row[-1] is None or (isinstance(row[-1], str) and not row[-1].strip())):
        row.pop()
    return row


def _normalize_user_for(v) -> str:
    raw = _cell_text(v).lower()
    for choice, _label in Product.USER_FOR_CHOICES:
        if raw == choice.lower():
            return choice
    return Product.USER_FOR_FAMILY


def _parse_stock(v) -> int:
    if v is None or _cell_text(v) == "":
        return 0
    qty = parse_decimal(v, field="Stock")
    if qty < 0 or qty != qty.to_integral_value():
        raise ValueError("Stock must be a whole number >= 0")
    return int(qty)


def parse_row(values) -> dict:
    """
    Convert one spreadsheet row into Product field values.
    Raises ValueError with a human message on bad data.
    """
    row = _trim_row(values)
    if len(row) < MIN_COLUMNS:
        raise ValueError(f"Expected at least {MIN_COLUMNS} columns, got {len(row)}")

    row = row + [None] * (len(COLUMNS) - len(row))

    code = _cell_text(row[0]).upper()
    name = _cell_text(row[1])
    if not code or not name:
        raise ValueError("Product Code and Product Name are required")

    mrp = money(parse_decimal(row[4], field="MRP"))
    if mrp < 0:
        raise ValueError("MRP must be zero or more")

    discount = Decimal("0")
    if _cell_text(row[5]):
        discount = parse_decimal(row[5], field="Discount %")
    if discount < 0 or discount > 100:
        raise ValueError("Discount % must be between 0 and 100")

    final_rate = None
    if _cell_text(row[6]):
        final_rate = money(parse_decimal(row[6], field="Final Rate"))
    if not final_rate:
        final_rate = compute_final_rate(mrp, discount)
    if final_rate > mrp:
        raise ValueError("Final Rate cannot exceed MRP")

    return {
        "product_code": code,
        "product_name": name,
        "category_name": _cell_text(row[2]),
        "user_for": _normalize_user_for(row[3]),
        "mrp": mrp,
        "discount": money(discount),
        "final_rate": final_rate,
        "stock": _parse_stock(row[7]),
        "description": _cell_text(row[8]),
        "content": _cell_text(row[9]),
    }


def _category_for(name: str, cache: dict):
    # cache only holds rows from committed savepoints
    if not name:
        return None
    cached = cache.get(name.lower())
    if cached is not None:
        return cached
    return Category.objects.filter(name__iexact=name).first() or Category.objects.create(name=name)


def import_products(fileobj) -> dict:
    """
    Upsert products from an .xlsx file object.

    Returns {"created": int, "updated": int, "errors": [{"row", "message"}]}.
    Row numbers are 1-based spreadsheet rows (header is row 1).
    """
    try:
        wb = load_workbook(fileobj, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        raise ImportFileError("Could not read spreadsheet. Upload a valid .xlsx file.") from exc

    ws = wb.worksheets[0]

    created = 0
    updated = 0
    errors: list[dict] = []
    categories: dict = {}

    try:
        for row_num, values in enumerate(ws.iter_rows(min_row=2, values_only=True), start=2):
            if not _trim_row(values):
                continue

            try:
                data = parse_row(values)
            except ValueError as exc:
                errors.append({"row": row_num, "message": str(exc)})
                continue

            try:
                category_name = data.pop("category_name")
                with transaction.atomic():
                    category = _category_for(category_name, categories)
                    code = data.pop("product_code")
                    _product, was_created = Product.objects.update_or_create(
                        product_code=code,
                        defaults={**data, "category": category},
                    )
            except Exception as exc:
                logger.warning(
                    "Product import row failed",
                    extra={"row": row_num, "error": str(exc)},
                )
                errors.append({"row": row_num, "message": str(exc)})
                continue

            if category is not None:
                categories.setdefault(category_name.lower(), category)
            if was_created:
                created += 1
            else:
                updated += 1
    finally:
        wb.close()

    logger.info(
        "Product import finished",
        extra={"created": created, "updated": updated, "errors": len(errors)},
    )
    return {"created": created, "updated": updated, "errors": errors}


# =====================================================
# EXPORT / TEMPLATE
# =====================================================

def _styled_sheet(title: str):
    wb = Workbook()
    ws = wb.active
    ws.title = title

    header_fill = PatternFill(start_color="B91C1C", end_color="B91C1C", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True, size=12)
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    for col_num, header in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.border = border
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for letter, width in COLUMN_WIDTHS.items():
        ws.column_dimensions[letter].width = width

    ws.freeze_panes = "A2"
    return wb, ws


def _to_bytes(wb) -> bytes:
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf.getvalue()


def product_row(p: Product) -> list:
    return [
        p.product_code,
        p.product_name,
        p.category.name if p.category_id else "",
        p.user_for,
        float(p.mrp),
        float(p.discount),
        float(p.final_rate),
        int(p.stock),
        p.description,
        p.content,
    ]


def export_products(queryset=None) -> bytes:
    qs = queryset if queryset is not None else Product.objects.all()
    wb, ws = _styled_sheet("Products")

    for p in qs.select_related("category").order_by("product_code"):
        ws.append(product_row(p))

    return _to_bytes(wb)


def product_template() -> bytes:
    wb, ws = _styled_sheet("Products")
    ws.append(SAMPLE_ROW)
    return _to_bytes(wb)
