from __future__ import annotations

import csv
import io
from typing import Any, Dict, Iterable, List

from invoicedesk.formatting import format_date, number_value
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.models import Invoice


SHEET_COLUMNS: List[str] = [
    "Invoice No",
    "Date",
    "Client Name",
    "Client Address",
    "Client Phone",
    "Items",
    "Total Amount",
    "Discount (%)",
    "Final Amount",
    "Paid Amount",
    "Due Amount",
    "Payment Status",
    "Confirmed By",
]


def _items_summary(invoice: Invoice, currency: str) -> str:
    return "; ".join(
        f"{item.description}: {currency} {number_value(item.amount)}" for item in invoice.items
    )


def flatten_invoice(invoice: Invoice, currency: str = "Rs") -> Dict[str, Any]:
    totals = invoice_totals(invoice)
    return {
        "Invoice No": invoice.invoice_number,
        "Date": format_date(invoice.date),
        "Client Name": invoice.client.name,
        "Client Address": invoice.client.address,
        "Client Phone": invoice.client.phone or "",
        "Items": _items_summary(invoice, currency),
        "Total Amount": number_value(totals.total),
        "Discount (%)": number_value(invoice.discount),
        "Final Amount": number_value(totals.final_amount),
        "Paid Amount": number_value(invoice.paid_amount),
        "Due Amount": number_value(totals.due_amount),
        "Payment Status": totals.status.label,
        "Confirmed By": invoice.confirmation_name or "",
    }


def build_sheet_records(invoices: Iterable[Invoice], currency: str = "Rs") -> List[Dict[str, Any]]:
    return [flatten_invoice(inv, currency) for inv in invoices]


def _csv_bytes(rows: List[List[Any]], header: List[str]) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=",", quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    for r in rows:
        writer.writerow([("" if v is None else v) for v in r])
    # Excel-friendly BOM
    return buf.getvalue().encode("utf-8-sig")


def export_invoices_csv(invoices: Iterable[Invoice], currency: str = "Rs") -> bytes:
    records = build_sheet_records(invoices, currency)
    rows = [[record[col] for col in SHEET_COLUMNS] for record in records]
    return _csv_bytes(rows, SHEET_COLUMNS)
