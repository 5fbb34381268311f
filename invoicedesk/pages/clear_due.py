from __future__ import annotations

from typing import Any, Callable, Dict

from nicegui import ui

from invoicedesk.actions import PaymentReceipt, apply_payment, find_invoice
from invoicedesk.container import AppContainer
from invoicedesk.errors import InvoiceError
from invoicedesk.formatting import format_money
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.invoice_preview import build_payment_receipt_html
from invoicedesk.models import Invoice
from invoicedesk.services.invoice_pdf import render_payment_receipt_pdf
from invoicedesk.styles import C_PAGE_TITLE, STYLE_TEXT_MUTED
from invoicedesk.ui_components import (
    ff_btn_primary,
    ff_btn_secondary,
    ff_card,
    ff_input,
    ff_number,
    ff_section_title,
    payment_status_badge,
    summary_row,
)

from ._shared import download_bytes, report_sync


def render_clear_due(container: AppContainer, on_paid: Callable[[Invoice], None]) -> None:
    settings = container.settings
    repo = container.repository
    cur = settings.currency
    state: Dict[str, Any] = {"number": "", "invoice": None, "amount": None, "receipt": None}

    def search() -> None:
        state["receipt"] = None
        try:
            state["invoice"] = find_invoice(repo, state["number"])
        except InvoiceError as exc:
            state["invoice"] = None
            ui.notify(str(exc), color="red")
        result.refresh()

    async def pay() -> None:
        invoice = state["invoice"]
        if invoice is None:
            ui.notify("Please search for an invoice first", color="orange")
            return
        try:
            receipt = apply_payment(repo, invoice.invoice_number, state["amount"], sync=container.sync)
        except InvoiceError as exc:
            ui.notify(str(exc), color="red")
            return
        state["invoice"] = receipt.invoice
        state["receipt"] = receipt
        state["amount"] = None
        ui.notify(f"Payment of {format_money(receipt.amount, cur)} recorded", color="green")
        result.refresh()
        on_paid(receipt.invoice)
        await report_sync(container)

    def print_receipt(receipt: PaymentReceipt) -> None:
        filename = f"Receipt-{receipt.invoice.invoice_number}.pdf"
        download_bytes(render_payment_receipt_pdf(receipt, settings), filename, "application/pdf")

    ui.label("Clear due amount").classes(C_PAGE_TITLE)

    with ff_card():
        ff_section_title("Find invoice")
        with ui.row().classes("w-full items-center gap-3 flex-nowrap"):
            ff_input(
                "Invoice number",
                on_change=lambda e: state.update(number=e.value or ""),
            ).classes("max-w-xs").on("keydown.enter", lambda _: search())
            ff_btn_primary("Search", on_click=search, icon="search")

    @ui.refreshable
    def result() -> None:
        invoice = state["invoice"]
        if invoice is None:
            return
        totals = invoice_totals(invoice)
        with ff_card():
            with ui.row().classes("w-full justify-between items-center"):
                ff_section_title(f"Invoice #{invoice.invoice_number}")
                payment_status_badge(totals.status)
            ui.label(f"{invoice.client.name}, {invoice.client.address}").classes(STYLE_TEXT_MUTED)
            summary_row("Final amount", format_money(totals.final_amount, cur))
            summary_row("Paid amount", format_money(invoice.paid_amount, cur))
            summary_row("Due amount", format_money(totals.due_amount, cur), bold=True)

            if totals.due_amount > 0:
                with ui.row().classes("w-full items-center gap-3 flex-nowrap mt-2"):
                    ff_number(
                        "Payment amount",
                        value=state["amount"],
                        min=0,
                        max=totals.due_amount,
                        on_change=lambda e: state.update(amount=e.value),
                    ).classes("max-w-xs")
                    ff_btn_primary("Apply payment", on_click=pay, icon="payments")
            else:
                ui.label("This invoice is fully paid").classes("text-sm text-emerald-700")

        receipt = state["receipt"]
        if receipt is not None:
            with ff_card():
                with ui.row().classes("w-full justify-between items-center"):
                    ff_section_title("Payment receipt")
                    ff_btn_secondary("Print receipt", on_click=lambda: print_receipt(receipt), icon="print")
                ui.html(build_payment_receipt_html(receipt, settings), sanitize=False).classes("w-full")

    result()
