# orders/services/challan_pdf.py

"""
CHALLAN / QUOTATION PDF (reportlab)

Layout (A4 portrait):
- diagonal watermark
- company header (default template company_info, falls back to site name)
- title: "REMITTANCE & CHALLAN" for paid orders, else "QUOTATION"
- number / date / time / payment status
- customer block
- items table: Product Name | Qty | Rate | Amount
- TOTAL AMOUNT
- footer terms + signature line

The builder works on a plain document dict so the same layout serves
placed orders and unplaced cart quotations.
"""

from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from xml.sax.saxutils import escape

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from content.models import ChallanTemplate
from content.services.challan_templates import get_default_template, merged_template_data
from products.services.pricing import money

TITLE_PAID = "REMITTANCE & CHALLAN"
TITLE_QUOTATION = "QUOTATION"

BRAND_RED = colors.HexColor("#B91C1C")
HEADER_BG = colors.HexColor("#FDE68A")
GRID = colors.HexColor("#7F1D1D")

PAGE_WIDTH, PAGE_HEIGHT = A4


def _rs(amount) -> str:
    # base-14 fonts have no rupee glyph
    return f"Rs. {money(amount):,.2f}"


def _p(text, style) -> Paragraph:
    return Paragraph(escape(str(text or "")), style)


def _watermark(text: str):
    def draw(canvas, _doc):
        canvas.saveState()
        canvas.setFont("Helvetica-Bold", 60)
        canvas.setFillColor(colors.Color(0.85, 0.1, 0.1, alpha=0.08))
        canvas.translate(PAGE_WIDTH / 2.0, PAGE_HEIGHT / 2.0)
        canvas.rotate(45)
        canvas.drawCentredString(0, 0, text)
        canvas.restoreState()

    return draw


def meta_rows(doc_data: dict, created) -> list[list[str]]:
    return [
        [
            doc_data.get("number_label") or "Challan No:",
            doc_data["number"],
            "Status:",
            str(doc_data.get("status") or "").upper(),
        ],
        ["Date:", created.strftime("%d/%m/%Y"), "Time:", created.strftime("%I:%M %p")],
    ]


def build_document_pdf(doc_data: dict, *, template_data: dict | None = None) -> bytes:
    """
    doc_data keys:
        title, number, created_at (aware datetime), status,
        customer {name, email, phone, address},
        items [{name, quantity, rate, amount}], total
    """
    tpl = template_data or merged_template_data(None)
    company = tpl.get("company_info") or {}
    fields = tpl.get("fields") or {}
    footer = tpl.get("footer") or {}

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36, rightMargin=36,
        topMargin=36, bottomMargin=36,
        title=f"{doc_data['title']} {doc_data['number']}",
    )
    content_width = PAGE_WIDTH - doc.leftMargin - doc.rightMargin

    styles = getSampleStyleSheet()
    base = styles["Normal"]
    brand = ParagraphStyle("brand", parent=styles["Title"], textColor=BRAND_RED, fontSize=22, leading=26)
    sub = ParagraphStyle("sub", parent=base, alignment=TA_CENTER, fontSize=9, leading=12)
    title = ParagraphStyle("doc_title", parent=styles["Heading2"], alignment=TA_CENTER)
    section = ParagraphStyle("section", parent=styles["Heading4"], textColor=BRAND_RED)
    right = ParagraphStyle("right", parent=base, alignment=TA_RIGHT)
    total_style = ParagraphStyle("total", parent=styles["Heading3"], alignment=TA_RIGHT)
    small = ParagraphStyle("small", parent=base, fontSize=8, leading=10)

    elems = []

    # ---- Company header
    elems.append(_p(company.get("name") or "Hello Crackers", brand))
    contact_bits = [company.get("address"), company.get("phone"), company.get("email")]
    contact = " | ".join(b for b in contact_bits if b)
    if contact:
        elems.append(_p(contact, sub))
    if company.get("gst_number"):
        elems.append(_p(f"GSTIN: {company['gst_number']}", sub))
    elems.append(Spacer(1, 10))
    elems.append(_p(doc_data["title"], title))
    elems.append(Spacer(1, 6))

    # ---- Number / date / status
    created = timezone.localtime(doc_data.get("created_at") or timezone.now())
    meta = Table(
        meta_rows(doc_data, created),
        colWidths=[70, content_width / 2 - 70, 60, content_width / 2 - 60],
    )
    meta.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]))
    elems.append(meta)
    elems.append(Spacer(1, 8))

    # ---- Customer block
    cust = doc_data.get("customer") or {}
    if fields.get("show_customer_details", True) and any(cust.values()):
        elems.append(_p("CUSTOMER DETAILS", section))
        rows = [
            ["Name:", _p(cust.get("name"), base)],
            ["Email:", _p(cust.get("email"), base)],
            ["Phone:", _p(cust.get("phone"), base)],
            ["Address:", _p(cust.get("address"), base)],
        ]
        cust_tbl = Table(rows, colWidths=[70, content_width - 70])
        cust_tbl.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 0.6, GRID),
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ]))
        elems.append(cust_tbl)
        elems.append(Spacer(1, 10))

    # ---- Items
    elems.append(_p("ITEMS", section))
    header = ["Product Name", "Qty", "Rate", "Amount"]
    data = [header]
    for item in doc_data.get("items") or []:
        data.append([
            _p(item["name"], base),
            str(item["quantity"]),
            _p(_rs(item["rate"]), right),
            _p(_rs(item["amount"]), right),
        ])

    items_tbl = Table(
        data,
        colWidths=[content_width - 230, 50, 85, 95],
        repeatRows=1,
    )
    items_tbl.setStyle(TableStyle([
        ("BOX", (0, 0), (-1, -1), 0.8, GRID),
        ("INNERGRID", (0, 0), (-1, -1), 0.3, GRID),
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (1, 1), (1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#FFF7ED")]),
    ]))
    elems.append(items_tbl)
    elems.append(Spacer(1, 8))

    if fields.get("show_totals", True):
        elems.append(_p(f"TOTAL AMOUNT: {_rs(doc_data.get('total') or Decimal('0'))}", total_style))
        elems.append(Spacer(1, 14))

    # ---- Footer
    for term in footer.get("terms") or []:
        elems.append(_p(f"• {term}", small))
    elems.append(Spacer(1, 6))
    elems.append(_p(f"Thank you for choosing {company.get('name') or 'Hello Crackers'}!", small))
    if company.get("phone"):
        elems.append(_p(f"For any queries, contact: {company['phone']}", small))

    if footer.get("signature_line", True):
        elems.append(Spacer(1, 28))
        sig = Table(
            [["", "Authorised Signatory"], ["", _p(footer.get("prepared_by") or "", right)]],
            colWidths=[content_width - 160, 160],
        )
        sig.setStyle(TableStyle([
            ("LINEABOVE", (1, 0), (1, 0), 0.6, colors.black),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
        ]))
        elems.append(sig)

    watermark = _watermark((company.get("name") or "Hello Crackers").upper())
    doc.build(elems, onFirstPage=watermark, onLaterPages=watermark)
    buffer.seek(0)
    return buffer.read()


# =====================================================
# ORDER / CART ADAPTERS
# =====================================================

def _template_data() -> dict:
    return merged_template_data(get_default_template(ChallanTemplate.TYPE_CHALLAN))


def order_document(order) -> dict:
    return {
        "title": TITLE_PAID if order.is_paid else TITLE_QUOTATION,
        "number": order.challan_number or order.order_number,
        "number_label": "Challan No:" if order.challan_number else "Order No:",
        "created_at": order.created_at,
        "status": order.payment_status,
        "customer": {
            "name": order.customer_name,
            "email": order.customer_email,
            "phone": order.customer_phone,
            "address": order.customer_address,
        },
        "items": [
            {
                "name": i.product_name,
                "quantity": i.quantity,
                "rate": i.unit_price,
                "amount": i.total_price,
            }
            for i in order.items.all()
        ],
        "total": order.total_amount,
    }


def order_pdf_filename(order) -> str:
    prefix = "Remittance" if order.is_paid else "Quotation"
    return f"{prefix}_{order.challan_number or order.order_number}.pdf"


def render_order_pdf(order) -> tuple[str, bytes]:
    return order_pdf_filename(order), build_document_pdf(order_document(order), template_data=_template_data())


def cart_document(cart, *, customer: dict | None = None) -> dict:
    items = list(cart.items.select_related("product").all())
    return {
        "title": TITLE_QUOTATION,
        "number": f"Q-{str(cart.id)[:8].upper()}",
        "number_label": "Quotation No:",
        "created_at": timezone.now(),
        "status": "quotation",
        "customer": customer or {},
        "items": [
            {
                "name": i.product.product_name,
                "quantity": i.quantity,
                "rate": i.unit_price,
                "amount": i.line_total,
            }
            for i in items
        ],
        "total": money(sum((i.line_total for i in items), Decimal("0.00"))),
    }


def render_cart_quotation(cart, *, customer: dict | None = None) -> tuple[str, bytes]:
    doc_data = cart_document(cart, customer=customer)
    return f"Quotation_{doc_data['number']}.pdf", build_document_pdf(doc_data, template_data=_template_data())
