# invoicedesk/services/invoice_pdf.py
from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING, Any

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from invoicedesk.formatting import format_date, format_money
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.models import Invoice
from invoicedesk.settings import Settings

if TYPE_CHECKING:
    from invoicedesk.actions import PaymentReceipt


_FONT = "Helvetica"
_FONT_B = "Helvetica-Bold"


def _safe_str(x: Any) -> str:
    return (str(x) if x is not None else "").strip()


def _wrap_text(text: str, font: str, size: int, max_width: float) -> list[str]:
    text = _safe_str(text)
    if not text:
        return [""]
    words = text.replace("\n", " ").split()
    lines: list[str] = []
    cur = ""
    for w in words:
        cand = (cur + " " + w).strip() if cur else w
        if stringWidth(cand, font, size) <= max_width:
            cur = cand
        else:
            if cur:
                lines.append(cur)
            cur = w
    if cur:
        lines.append(cur)
    return lines or [""]


class _Pen:
    def __init__(self, c: Canvas, left: float, right: float) -> None:
        self.c = c
        self.left = left
        self.right = right

    def text(self, x: float, y: float, s: Any, size: int = 10, bold: bool = False) -> None:
        self.c.setFont(_FONT_B if bold else _FONT, size)
        self.c.drawString(x, y, _safe_str(s))

    def text_r(self, x_right: float, y: float, s: Any, size: int = 10, bold: bool = False) -> None:
        self.c.setFont(_FONT_B if bold else _FONT, size)
        self.c.drawRightString(x_right, y, _safe_str(s))

    def text_c(self, y: float, s: Any, size: int = 10, bold: bool = False) -> None:
        self.c.setFont(_FONT_B if bold else _FONT, size)
        self.c.drawCentredString((self.left + self.right) / 2, y, _safe_str(s))

    def rule(self, y: float, dashed: bool = False) -> None:
        self.c.setLineWidth(0.5)
        if dashed:
            self.c.setDash(3, 3)
        self.c.line(self.left, y, self.right, y)
        self.c.setDash()


def _draw_header(pen: _Pen, top: float, invoice: Invoice, settings: Settings, date_text: str) -> float:
    pen.text_c(top, settings.business_name, size=14)
    pen.text_c(top - 13, settings.business_address, size=9)

    y = top - 34
    pen.text(pen.left, y, f"PAN NO.: {invoice.pan_number}", size=9)
    pen.text(pen.left, y - 12, f"NAME: {invoice.client.name}", size=9)
    pen.text(pen.left, y - 24, f"ADDRESS: {invoice.client.address}", size=9)
    pen.text_r(pen.right, y, f"INVOICE NO: {invoice.invoice_number}", size=9)
    pen.text_r(pen.right, y - 12, date_text, size=9)
    return y - 40


def _draw_table_head(pen: _Pen, y: float) -> float:
    pen.rule(y + 10)
    pen.text(pen.left, y, "DESCRIPTION", size=9, bold=True)
    pen.text_r(pen.right, y, "TOTAL", size=9, bold=True)
    pen.rule(y - 5)
    return y - 18


_HEADER_H = 58
_TOTALS_H = 70
_LINE_H = 11
_ROW_GAP = 3


def _item_rows(pen: _Pen, invoice: Invoice) -> list[list[str]]:
    desc_width = (pen.right - pen.left) * 0.7
    return [_wrap_text(item.description, _FONT, 9, desc_width) for item in invoice.items]


def _rows_height(rows: list[list[str]]) -> float:
    return sum(_LINE_H * len(lines) + _ROW_GAP for lines in rows)


def _draw_invoice_copy(
    pen: _Pen,
    top: float,
    bottom: float,
    invoice: Invoice,
    settings: Settings,
    page: tuple[float, float],
) -> None:
    """Draw one receipt copy.

    Rows that do not fit above `bottom` continue on a fresh page whose
    writable area is `page` (top, bottom). Every item is printed.
    """
    cur = settings.currency
    totals = invoice_totals(invoice)
    y = _draw_header(pen, top, invoice, settings, format_date(invoice.date))
    y = _draw_table_head(pen, y)

    rows = _item_rows(pen, invoice)
    for index, (item, lines) in enumerate(zip(invoice.items, rows)):
        needed = _LINE_H * len(lines) + _ROW_GAP
        # The last row keeps the totals block on its page.
        reserve = _TOTALS_H if index == len(rows) - 1 else 0
        if y - needed - reserve < bottom:
            pen.c.showPage()
            y = _draw_table_head(pen, page[0] - 10)
            bottom = page[1]
        pen.text_r(pen.right, y, format_money(item.amount, cur), size=9)
        for ln in lines:
            pen.text(pen.left, y, ln, size=9)
            y -= _LINE_H
        y -= _ROW_GAP
    if y - _TOTALS_H < bottom:
        pen.c.showPage()
        y = page[0] - 10

    pen.rule(y + 8)
    pen.text(pen.left, y - 2, "TOTAL", size=9, bold=True)
    pen.text_r(pen.right, y - 2, format_money(totals.total, cur), size=9)
    pen.rule(y - 8)
    y -= 22

    label_x = pen.right - 70 * mm
    if invoice.discount > 0:
        pen.text(label_x, y, f"Discount ({invoice.discount:g}%)", size=9)
        pen.text_r(pen.right, y, format_money(totals.discount_amount, cur), size=9)
        y -= 12
    pen.text(label_x, y, "Total Paid Amount", size=9)
    pen.text_r(pen.right, y, format_money(invoice.paid_amount, cur), size=9)
    y -= 14
    pen.text(label_x, y, "Amount due", size=11, bold=True)
    pen.text_r(pen.right, y, format_money(totals.due_amount, cur), size=11, bold=True)

    if invoice.confirmation_name:
        pen.text(pen.left, y - 20, f"Confirmed by: {invoice.confirmation_name}", size=9)


def render_invoice_to_pdf_bytes(invoice: Invoice, settings: Settings) -> bytes:
    """Render the printable invoice as two copies.

    Both copies share one A4 page, split by a dashed rule, when the items fit
    in half a page. Longer invoices print each copy on its own pages.
    """
    buf = BytesIO()
    c = Canvas(buf, pagesize=A4)
    w, h = A4
    margin = 15 * mm
    pen = _Pen(c, margin, w - margin)
    page = (h - margin, margin)

    half = h / 2
    # The lower half is the smaller one.
    half_space = (half - 10 * mm) - margin - _HEADER_H - _TOTALS_H
    if _rows_height(_item_rows(pen, invoice)) <= half_space:
        _draw_invoice_copy(pen, h - margin, half + 6 * mm, invoice, settings, page)
        pen.rule(half, dashed=True)
        _draw_invoice_copy(pen, half - 10 * mm, margin, invoice, settings, page)
    else:
        _draw_invoice_copy(pen, h - margin, margin, invoice, settings, page)
        c.showPage()
        _draw_invoice_copy(pen, h - margin, margin, invoice, settings, page)

    c.setTitle(f"Invoice {invoice.invoice_number}")
    c.save()
    return buf.getvalue()


def render_payment_receipt_pdf(receipt: "PaymentReceipt", settings: Settings) -> bytes:
    cur = settings.currency
    buf = BytesIO()
    c = Canvas(buf, pagesize=A4)
    w, h = A4
    margin = 18 * mm
    pen = _Pen(c, margin, w - margin)
    invoice = receipt.invoice

    y = _draw_header(pen, h - margin, invoice, settings, format_date(receipt.paid_at))
    y = _draw_table_head(pen, y)
    pen.text(pen.left, y, f"Payment for Invoice #{invoice.invoice_number}", size=9)
    pen.text_r(pen.right, y, format_money(receipt.amount, cur), size=9)
    pen.rule(y - 6)
    y -= 18
    pen.text(pen.left, y, "TOTAL", size=9, bold=True)
    pen.text_r(pen.right, y, format_money(receipt.amount, cur), size=9, bold=True)
    pen.rule(y - 6)
    y -= 28

    label_x = pen.right - 70 * mm
    pen.text(label_x, y, "Previous Due:", size=9)
    pen.text_r(pen.right, y, format_money(receipt.previous_due, cur), size=9)
    pen.text(label_x, y - 12, "Payment Amount:", size=9)
    pen.text_r(pen.right, y - 12, format_money(receipt.amount, cur), size=9)
    pen.text(label_x, y - 26, "Amount due:", size=11, bold=True)
    pen.text_r(pen.right, y - 26, format_money(receipt.remaining_due, cur), size=11, bold=True)

    pen.text(pen.left, y - 70, "Confirmed by: ___________________", size=10)

    c.setTitle(f"Payment receipt {invoice.invoice_number}")
    c.save()
    return buf.getvalue()
