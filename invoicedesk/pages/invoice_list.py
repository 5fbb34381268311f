from __future__ import annotations

from typing import Any, Callable, Dict

from nicegui import ui

from invoicedesk.actions import delete_invoice, search_invoices
from invoicedesk.container import AppContainer
from invoicedesk.errors import InvoiceError
from invoicedesk.exports import export_invoices_csv
from invoicedesk.formatting import format_date, format_money
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.invoice_numbering import build_invoice_filename
from invoicedesk.models import Invoice
from invoicedesk.services.invoice_pdf import render_invoice_to_pdf_bytes
from invoicedesk.styles import C_CARD, C_PAGE_TITLE, C_SECTION_TITLE, C_TABLE_HEADER, C_TABLE_ROW, STYLE_TEXT_MUTED
from invoicedesk.ui_components import ff_btn_danger, ff_btn_primary, ff_btn_secondary, ff_card, payment_status_badge

from ._shared import download_bytes, report_sync


_GRID = "grid grid-cols-[90px_100px_1fr_120px_120px_120px_110px_120px] items-center gap-3"


def render_invoice_list(container: AppContainer, on_edit: Callable[[Invoice], None]) -> Callable[[], None]:
    """Searchable invoice table with export and sync actions. Returns a refresh callback."""
    settings = container.settings
    repo = container.repository
    cur = settings.currency
    state: Dict[str, Any] = {"term": "", "delete_id": None}

    def last_sync_text() -> str:
        return f"Last synced: {repo.last_sync_time or 'Never'}"

    def refresh() -> None:
        table.refresh()
        sync_label.text = last_sync_text()

    async def run_sync() -> None:
        if container.sync is None:
            ui.notify("Spreadsheet sync is not configured", color="orange")
            return
        container.sync.submit(repo.list())
        ui.notify("Syncing invoices to the spreadsheet...")
        await report_sync(container)
        sync_label.text = last_sync_text()

    def run_export() -> None:
        invoices = repo.list()
        if not invoices:
            ui.notify("No invoices to export", color="orange")
            return
        download_bytes(export_invoices_csv(invoices, cur), "invoice_data.csv", "text/csv")
        ui.notify(f"Exported {len(invoices)} invoice(s)", color="green")

    def run_pdf(invoice: Invoice) -> None:
        download_bytes(render_invoice_to_pdf_bytes(invoice, settings), build_invoice_filename(invoice), "application/pdf")

    async def confirm_delete() -> None:
        invoice_id = state["delete_id"]
        delete_dialog.close()
        if not invoice_id:
            return
        try:
            removed = delete_invoice(repo, invoice_id, sync=container.sync)
        except InvoiceError as exc:
            ui.notify(str(exc), color="red")
            return
        ui.notify(f"Invoice #{removed.invoice_number} deleted", color="green")
        refresh()
        await report_sync(container)

    def open_delete(invoice: Invoice) -> None:
        state["delete_id"] = invoice.id
        delete_label.text = f"Delete invoice #{invoice.invoice_number} for {invoice.client.name}?"
        delete_dialog.open()

    with ui.dialog() as delete_dialog:
        with ui.card().classes(C_CARD + " p-5 w-[520px] max-w-[92vw]"):
            ui.label("Delete invoice").classes(C_SECTION_TITLE)
            delete_label = ui.label("").classes(STYLE_TEXT_MUTED)
            with ui.row().classes("justify-end gap-2 mt-3 w-full"):
                ff_btn_secondary("Cancel", on_click=delete_dialog.close)
                ff_btn_danger("Delete", on_click=confirm_delete)

    with ui.row().classes("w-full justify-between items-center gap-3 flex-wrap"):
        ui.label("Invoices").classes(C_PAGE_TITLE)
        with ui.row().classes("gap-2 items-center"):
            sync_label = ui.label(last_sync_text()).classes(STYLE_TEXT_MUTED)
            ff_btn_secondary("Sync now", on_click=run_sync, icon="sync")
            if settings.sheet_url:
                ff_btn_secondary(
                    "Open sheet",
                    on_click=lambda: ui.navigate.to(settings.sheet_url, new_tab=True),
                    icon="open_in_new",
                )
            ff_btn_primary("Export CSV", on_click=run_export, icon="download")

    def set_term(value: Any) -> None:
        state["term"] = value or ""
        table.refresh()

    ui.input("Search by invoice number or client name", on_change=lambda e: set_term(e.value)).props(
        "outlined dense clearable"
    ).classes("w-full max-w-md")

    @ui.refreshable
    def table() -> None:
        invoices = search_invoices(repo.list(), state["term"])
        with ff_card(pad="p-0"):
            with ui.element("div").classes(f"{C_TABLE_HEADER} {_GRID}"):
                for head in ("No.", "Date", "Client", "Final", "Paid", "Due", "Status", ""):
                    ui.label(head)
            if not invoices:
                ui.label("No invoices found").classes(f"{STYLE_TEXT_MUTED} px-3 py-4")
                return
            for inv in sorted(invoices, key=lambda i: i.invoice_number, reverse=True):
                totals = invoice_totals(inv)
                with ui.element("div").classes(f"{C_TABLE_ROW} {_GRID}"):
                    ui.label(inv.invoice_number).classes("font-mono")
                    ui.label(format_date(inv.date))
                    ui.label(inv.client.name).classes("truncate")
                    ui.label(format_money(totals.final_amount, cur)).classes("tabular-nums")
                    ui.label(format_money(inv.paid_amount, cur)).classes("tabular-nums")
                    ui.label(format_money(totals.due_amount, cur)).classes("tabular-nums")
                    payment_status_badge(totals.status)
                    with ui.row().classes("gap-1 justify-end flex-nowrap"):
                        ui.button(icon="edit", on_click=lambda i=inv: on_edit(i)).props("flat round dense")
                        ui.button(icon="picture_as_pdf", on_click=lambda i=inv: run_pdf(i)).props("flat round dense")
                        ui.button(icon="delete", on_click=lambda i=inv: open_delete(i)).props(
                            "flat round dense"
                        ).classes("text-rose-600")

    table()
    return refresh
