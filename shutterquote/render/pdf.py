"""Render a stored quotation as an A4 PDF document."""

from __future__ import annotations

import html
import io
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import HRFlowable

from shutterquote.core.config import get_settings
from shutterquote.core.errors import RenderingFailure
from shutterquote.pricing.calculator import DISCOUNT_NONE, DISCOUNT_PERCENTAGE, quantize_money

logger = logging.getLogger(__name__)

MARGIN = 50
HEADING_COLOR = colors.HexColor("#2c3e50")
TEXT_COLOR = colors.HexColor("#34495e")
MUTED_COLOR = colors.HexColor("#7f8c8d")
FOOTER_COLOR = colors.HexColor("#95a5a6")
RULE_COLOR = colors.HexColor("#3498db")


def pdf_filename(quotation_number: str) -> str:
    return f"quotation-{quotation_number}.pdf"


def product_type_display(product_type: str) -> str:
    return product_type.replace("_", " ").title()


def _money(value: Any, symbol: str) -> str:
    return f"{symbol}{quantize_money(Decimal(str(value))):,.2f}"


def _plain_number(value: Any) -> str:
    # 20.00 -> "20", 7.50 -> "7.5"
    number = Decimal(str(value)).normalize()
    return f"{number:f}"


def _format_created(value: Any) -> str:
    if isinstance(value, datetime):
        return f"{value:%B} {value.day}, {value.year}"
    return str(value or "")


def _pricing_rows(quotation: Any, symbol: str) -> tuple[list[list[Any]], Optional[int], int]:
    """Label/value rows in fixed order.

    Returns the rows, the index of the "Additional Costs" sub-heading (or None)
    and the index of the total row.
    """
    rows: list[list[Any]] = [["Net Price:", _money(quotation.net_price, symbol)]]

    discount_amount = Decimal(str(quotation.discount_amount or 0))
    if quotation.discount_type != DISCOUNT_NONE and discount_amount > 0:
        if quotation.discount_type == DISCOUNT_PERCENTAGE:
            label = f"Discount ({_plain_number(quotation.discount_value)}%):"
        else:
            label = "Discount:"
        rows.append([label, "-" + _money(discount_amount, symbol)])

    rows.append(["Gross Price:", _money(quotation.gross_price, symbol)])
    rows.append([f"VAT ({_plain_number(quotation.vat_percentage)}%):", _money(quotation.vat_amount, symbol)])

    costs_heading = None
    if quotation.additional_costs:
        costs_heading = len(rows)
        rows.append(["Additional Costs:", ""])
    for cost in quotation.additional_costs or []:
        rows.append([f"    {cost['label']}:", _money(cost["amount"], symbol)])

    rows.append(["TOTAL:", _money(quotation.final_total, symbol)])
    return rows, costs_heading, len(rows) - 1


def render_quotation_pdf(quotation: Any, *, company_name: Optional[str] = None) -> bytes:
    """Build the PDF for ``quotation`` (an ORM row or any object with the same attributes).

    Rendering never touches the stored record. Any engine failure is raised as
    RenderingFailure and no bytes are returned.
    """
    settings = get_settings()
    symbol = settings.CURRENCY_SYMBOL
    company_name = company_name or settings.COMPANY_NAME

    try:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN + 20,
            title=f"Quotation {quotation.quotation_number}",
        )
        styles = getSampleStyleSheet()
        title_style = styles["Title"].clone("QuoteTitle", textColor=HEADING_COLOR, fontSize=24, leading=28)
        subtitle_style = styles["Normal"].clone("QuoteSubtitle", textColor=MUTED_COLOR, alignment=1, fontSize=12)
        section_style = styles["Heading3"].clone("QuoteSection", textColor=HEADING_COLOR, spaceBefore=14)
        body_style = styles["BodyText"].clone("QuoteBody", textColor=TEXT_COLOR, fontSize=11, leading=15)
        notes_style = styles["BodyText"].clone("QuoteNotes", textColor=TEXT_COLOR, fontSize=10)

        def line(text: str) -> Paragraph:
            return Paragraph(html.escape(text), body_style)

        elements: List[Any] = []
        if company_name:
            elements.append(Paragraph(html.escape(company_name), subtitle_style))
        elements.append(Paragraph("QUOTATION", title_style))
        elements.append(Paragraph(f"Quotation #{html.escape(quotation.quotation_number)}", subtitle_style))
        elements.append(Spacer(1, 12))
        elements.append(HRFlowable(width="100%", thickness=2, color=RULE_COLOR, spaceAfter=6))

        elements.append(Paragraph("Customer Information", section_style))
        elements.append(line(f"Name: {quotation.customer_name}"))
        if quotation.customer_email:
            elements.append(line(f"Email: {quotation.customer_email}"))
        if quotation.customer_phone:
            elements.append(line(f"Phone: {quotation.customer_phone}"))
        if quotation.customer_address:
            elements.append(line(f"Address: {quotation.customer_address}"))

        elements.append(Paragraph("Product Details", section_style))
        elements.append(line(f"Product Type: {product_type_display(quotation.product_type)}"))
        elements.append(line(f"Dimensions: {_plain_number(quotation.width)} cm × {_plain_number(quotation.height)} cm"))
        elements.append(line(f"Quantity: {quotation.quantity}"))
        elements.append(line(f"Total Area: {quantize_money(Decimal(str(quotation.area)))} m²"))
        elements.append(line(f"Price per m²: {_money(quotation.price_per_sqm, symbol)}"))

        elements.append(Paragraph("Pricing Breakdown", section_style))
        rows, costs_heading, total_index = _pricing_rows(quotation, symbol)
        table_style = TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 11),
                ("TEXTCOLOR", (0, 0), (-1, -1), TEXT_COLOR),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("LINEABOVE", (0, total_index), (-1, total_index), 1, RULE_COLOR),
                ("FONTNAME", (0, total_index), (-1, total_index), "Helvetica-Bold"),
                ("FONTSIZE", (0, total_index), (-1, total_index), 14),
                ("TEXTCOLOR", (0, total_index), (-1, total_index), HEADING_COLOR),
                ("TOPPADDING", (0, total_index), (-1, total_index), 8),
            ]
        )
        if costs_heading is not None:
            table_style.add("FONTNAME", (0, costs_heading), (0, costs_heading), "Helvetica-Bold")
            table_style.add("TEXTCOLOR", (0, costs_heading), (0, costs_heading), HEADING_COLOR)
        table = Table(rows, colWidths=[doc.width * 0.6, doc.width * 0.4])
        table.setStyle(table_style)
        elements.append(table)

        if quotation.notes:
            elements.append(Paragraph("Notes", section_style))
            elements.append(Paragraph(html.escape(quotation.notes).replace("\n", "<br/>"), notes_style))

        footer = f"Generated on {_format_created(quotation.created_at)}"

        def draw_footer(canvas_obj, document) -> None:
            canvas_obj.saveState()
            canvas_obj.setFont("Helvetica", 9)
            canvas_obj.setFillColor(FOOTER_COLOR)
            page_width, _ = document.pagesize
            canvas_obj.drawCentredString(page_width / 2.0, MARGIN - 20, footer)
            canvas_obj.drawRightString(page_width - MARGIN, MARGIN - 20, f"Page {canvas_obj.getPageNumber()}")
            canvas_obj.restoreState()

        doc.build(elements, onFirstPage=draw_footer, onLaterPages=draw_footer)
    except Exception as exc:
        logger.exception("Rendering quotation %s failed", getattr(quotation, "quotation_number", "?"))
        raise RenderingFailure(f"Could not render quotation: {exc}") from exc

    return buffer.getvalue()
