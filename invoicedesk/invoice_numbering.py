from __future__ import annotations

import os
import re
from typing import Any, Iterable


INVOICE_NUMBER_WIDTH = 5


def _number_of(invoice: Any) -> str:
    if isinstance(invoice, str):
        return invoice
    if isinstance(invoice, dict):
        return str(invoice.get("invoice_number") or invoice.get("invoiceNumber") or "")
    return str(getattr(invoice, "invoice_number", "") or "")


def parse_invoice_number(value: str | None) -> int:
    stripped = (value or "").strip().lstrip("0")
    match = re.match(r"\d+", stripped)
    if not match:
        return 0
    return int(match.group(0))


def format_invoice_number(seq: int) -> str:
    return str(seq).zfill(INVOICE_NUMBER_WIDTH)


def next_invoice_number(invoices: Iterable[Any]) -> str:
    """Zero-padded successor of the highest existing invoice number.

    Accepts invoices, dicts or plain number strings. Unparsable numbers
    count as 0, so an empty collection yields "00001".
    """
    highest = max((parse_invoice_number(_number_of(inv)) for inv in invoices), default=0)
    return format_invoice_number(highest + 1)


def _sanitize_filename(value: str) -> str:
    cleaned = value.strip().replace(os.sep, "-")
    cleaned = re.sub(r"[^\w.\-]+", "_", cleaned, flags=re.UNICODE)
    return cleaned or "invoice"


def build_invoice_filename(invoice: Any, prefix: str = "Invoice") -> str:
    number = _number_of(invoice).strip()
    filename = _sanitize_filename(f"{prefix}-{number}" if number else prefix)
    if not filename.lower().endswith(".pdf"):
        filename = f"{filename}.pdf"
    return filename
