# =========================
# INVOICEDESK/MAIN.PY
# =========================

from __future__ import annotations

import logging

from fastapi import HTTPException, Response
from nicegui import app, ui

from invoicedesk.container import AppContainer, create_app_container
from invoicedesk.env import load_env
from invoicedesk.exports import export_invoices_csv
from invoicedesk.invoice_numbering import build_invoice_filename
from invoicedesk.logging_setup import setup_logging
from invoicedesk.models import Invoice
from invoicedesk.pages import render_clear_due, render_invoice_editor, render_invoice_list
from invoicedesk.services.invoice_pdf import render_invoice_to_pdf_bytes
from invoicedesk.styles import C_BG, C_CONTAINER
from invoicedesk.ui_components import apply_global_ui_theme


load_env()
setup_logging()
logger = logging.getLogger(__name__)

container: AppContainer = create_app_container()
logger.info(
    "app.started",
    extra={"db_path": container.settings.db_path, "sync_enabled": container.settings.sync_enabled},
)


@app.get("/api/invoices/{invoice_number}/pdf")
def invoice_pdf(invoice_number: str) -> Response:
    invoice = container.repository.find_by_number(invoice_number)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    pdf_bytes = render_invoice_to_pdf_bytes(invoice, container.settings)
    headers = {"Content-Disposition": f'inline; filename="{build_invoice_filename(invoice)}"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


@app.get("/api/exports/invoices.csv")
def invoices_csv() -> Response:
    payload = export_invoices_csv(container.repository.list(), container.settings.currency)
    headers = {"Content-Disposition": 'attachment; filename="invoice_data.csv"'}
    return Response(content=payload, media_type="text/csv", headers=headers)


@ui.page("/")
def index() -> None:
    apply_global_ui_theme()
    ui.query("body").classes(C_BG)

    with ui.header().classes("bg-white text-slate-900 border-b border-slate-200"):
        with ui.row().classes("w-full max-w-6xl mx-auto items-center justify-between px-6"):
            ui.label(container.settings.business_name).classes("text-lg font-semibold")
            with ui.tabs().props("no-caps dense active-color=amber-8 indicator-color=amber-8") as tabs:
                create_tab = ui.tab("Create Invoice", icon="edit_note")
                list_tab = ui.tab("Invoice List", icon="list_alt")
                due_tab = ui.tab("Clear Due Amount", icon="payments")

    hooks = {"refresh_list": lambda: None}

    def edit(invoice: Invoice) -> None:
        editor.load(invoice)
        tabs.set_value(create_tab)

    def paid(invoice: Invoice) -> None:
        hooks["refresh_list"]()
        editor.adopt_external_save(invoice)

    with ui.tab_panels(tabs, value=create_tab).classes("w-full bg-transparent"):
        with ui.tab_panel(create_tab):
            with ui.column().classes(C_CONTAINER):
                editor = render_invoice_editor(container, on_saved=lambda: hooks["refresh_list"]())
        with ui.tab_panel(list_tab):
            with ui.column().classes(C_CONTAINER):
                hooks["refresh_list"] = render_invoice_list(container, on_edit=edit)
        with ui.tab_panel(due_tab):
            with ui.column().classes(C_CONTAINER):
                render_clear_due(container, on_paid=paid)


def run() -> None:
    ui.run(
        title="InvoiceDesk",
        host="0.0.0.0",
        port=container.settings.port,
        storage_secret=container.settings.storage_secret,
        favicon="🧾",
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    run()
