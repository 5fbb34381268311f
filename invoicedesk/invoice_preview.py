from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from invoicedesk.formatting import format_date, format_money
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.models import Invoice
from invoicedesk.settings import Settings

if TYPE_CHECKING:
    from invoicedesk.actions import PaymentReceipt


def _header_html(settings: Settings) -> str:
    return (
        "<div class='text-center mb-4'>"
        f"<div class='text-xl'>{escape(settings.business_name)}</div>"
        f"<div class='text-sm'>{escape(settings.business_address)}</div>"
        "</div>"
    )


def _party_html(invoice: Invoice, date_text: str) -> str:
    return (
        "<div class='flex justify-between text-sm mb-4'>"
        "<div>"
        f"<div>PAN NO.: {escape(invoice.pan_number)}</div>"
        f"<div>NAME: {escape(invoice.client.name)}</div>"
        f"<div>ADDRESS: {escape(invoice.client.address)}</div>"
        "</div>"
        "<div class='text-right'>"
        f"<div>INVOICE NO: {escape(invoice.invoice_number)}</div>"
        f"<div>{escape(date_text)}</div>"
        "</div>"
        "</div>"
    )


def _receipt_html(invoice: Invoice, settings: Settings) -> str:
    cur = settings.currency
    totals = invoice_totals(invoice)

    rows_html = ""
    for item in invoice.items:
        rows_html += (
            "<tr>"
            f"<td class='text-left'>{escape(item.description)}</td>"
            f"<td class='text-right'>{escape(format_money(item.amount, cur))}</td>"
            "</tr>"
        )

    discount_row = ""
    if invoice.discount > 0:
        discount_row = (
            "<tr>"
            f"<td class='text-right'>Discount ({invoice.discount:g}%)</td>"
            f"<td class='text-right'>{escape(format_money(totals.discount_amount, cur))}</td>"
            "</tr>"
        )

    confirmed = ""
    if invoice.confirmation_name:
        confirmed = f"<div class='mt-4 text-sm'>Confirmed by: {escape(invoice.confirmation_name)}</div>"

    return (
        "<div class='invoice-receipt mb-2 pb-2'>"
        f"{_header_html(settings)}"
        f"{_party_html(invoice, format_date(invoice.date))}"
        "<table class='w-full text-sm border-collapse'>"
        "<thead>"
        "<tr class='border-t border-b'>"
        "<th class='text-left py-1'>DESCRIPTION</th>"
        "<th class='text-right py-1'>TOTAL</th>"
        "</tr>"
        "</thead>"
        f"<tbody>{rows_html}</tbody>"
        "<tfoot>"
        "<tr class='border-t border-b font-semibold'>"
        "<td>TOTAL</td>"
        f"<td class='text-right'>{escape(format_money(totals.total, cur))}</td>"
        "</tr>"
        f"{discount_row}"
        "<tr>"
        "<td class='text-right'>Total Paid Amount</td>"
        f"<td class='text-right'>{escape(format_money(invoice.paid_amount, cur))}</td>"
        "</tr>"
        "<tr class='font-bold'>"
        "<td class='text-right'>Amount due</td>"
        f"<td class='text-right'>{escape(format_money(totals.due_amount, cur))}</td>"
        "</tr>"
        "</tfoot>"
        "</table>"
        f"{confirmed}"
        "</div>"
    )


def build_invoice_preview_html(invoice: Invoice, settings: Settings) -> str:
    receipt = _receipt_html(invoice, settings)
    return (
        "<div class='invoice-preview flex flex-col gap-4'>"
        f"{receipt}"
        "<div class='border-t border-dashed my-4'></div>"
        f"{receipt}"
        "</div>"
    )


def build_payment_receipt_html(receipt: "PaymentReceipt", settings: Settings) -> str:
    cur = settings.currency
    invoice = receipt.invoice
    amount = escape(format_money(receipt.amount, cur))
    return (
        "<div class='payment-receipt p-4'>"
        f"{_header_html(settings)}"
        f"{_party_html(invoice, format_date(receipt.paid_at))}"
        "<table class='w-full text-sm border-collapse mb-4'>"
        "<tr class='border-b font-semibold'><th class='text-left'>DESCRIPTION</th><th class='text-right'>TOTAL</th></tr>"
        f"<tr class='border-b'><td>Payment for Invoice #{escape(invoice.invoice_number)}</td>"
        f"<td class='text-right'>{amount}</td></tr>"
        f"<tr class='border-b font-semibold'><td>TOTAL</td><td class='text-right'>{amount}</td></tr>"
        "</table>"
        "<div class='text-sm text-right'>"
        f"<div>Previous Due: {escape(format_money(receipt.previous_due, cur))}</div>"
        f"<div>Payment Amount: {amount}</div>"
        f"<div class='font-bold'>Amount due: {escape(format_money(receipt.remaining_due, cur))}</div>"
        "</div>"
        "<div class='mt-8'>Confirmed by: ___________________</div>"
        "</div>"
    )
