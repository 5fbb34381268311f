from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from nicegui import ui

from invoicedesk.actions import apply_preset, new_draft_invoice, new_line_item, save_invoice, validate_invoice
from invoicedesk.container import AppContainer
from invoicedesk.errors import InvoiceError, InvoiceValidationError
from invoicedesk.formatting import format_money
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.invoice_numbering import build_invoice_filename
from invoicedesk.invoice_preview import build_invoice_preview_html
from invoicedesk.models import Invoice
from invoicedesk.services.invoice_pdf import render_invoice_to_pdf_bytes
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


def _amount(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class InvoiceEditor:
    load: Callable[[Optional[Invoice]], None]
    adopt_external_save: Callable[[Invoice], None]


def render_invoice_editor(container: AppContainer, on_saved: Callable[[], None]) -> InvoiceEditor:
    """Render the create/edit form.

    `load` opens an invoice, or a new draft when given None.
    `adopt_external_save` picks up a payment recorded elsewhere for the open invoice.
    """
    settings = container.settings
    repo = container.repository
    preset_options = {p.value: p.label for p in settings.presets}

    state: Dict[str, Any] = {
        "invoice": new_draft_invoice(repo.list(), settings),
        "errors": {},
    }

    def current() -> Invoice:
        return state["invoice"]

    def update(**changes: Any) -> None:
        state["invoice"] = current().model_copy(update=changes)
        summary.refresh()
        preview.refresh()

    def update_client(field: str, value: Any) -> None:
        client = current().client.model_copy(update={field: value or ""})
        update(client=client)

    def update_item(item_id: str, **changes: Any) -> None:
        items = [it.model_copy(update=changes) if it.id == item_id else it for it in current().items]
        update(items=items)

    def choose_preset(item_id: str, value: str) -> None:
        items = [apply_preset(it, value) if it.id == item_id else it for it in current().items]
        update(items=items)
        items_section.refresh()

    def add_item() -> None:
        update(items=[*current().items, new_line_item()])
        items_section.refresh()

    def remove_item(item_id: str) -> None:
        if len(current().items) <= 1:
            return
        update(items=[it for it in current().items if it.id != item_id])
        items_section.refresh()

    def load(invoice: Optional[Invoice] = None) -> None:
        state["invoice"] = invoice if invoice is not None else new_draft_invoice(repo.list(), settings)
        state["errors"] = {}
        form.refresh()

    async def handle_save() -> None:
        is_new = not current().id
        try:
            saved = save_invoice(repo, current(), sync=container.sync)
        except InvoiceValidationError as exc:
            state["errors"] = exc.field_errors
            form.refresh()
            ui.notify(str(exc), color="red")
            return
        except InvoiceError as exc:
            ui.notify(str(exc), color="red")
            return

        ui.notify(f"Invoice #{saved.invoice_number} {'created' if is_new else 'updated'}", color="green")
        load(None if is_new else saved)
        on_saved()
        await report_sync(container)

    def handle_pdf() -> None:
        errors = validate_invoice(current())
        if errors:
            state["errors"] = errors
            form.refresh()
            ui.notify("Please fill in all required fields", color="red")
            return
        invoice = current()
        download_bytes(render_invoice_to_pdf_bytes(invoice, settings), build_invoice_filename(invoice), "application/pdf")

    @ui.refreshable
    def items_section() -> None:
        errors = state["errors"]
        if errors.get("items"):
            ui.label(errors["items"]).classes("text-xs text-rose-600")
        for index, item in enumerate(current().items):
            with ui.row().classes("w-full items-start gap-3 flex-nowrap"):
                ui.select(
                    preset_options,
                    value=item.preset if item.preset in preset_options else "custom",
                    label="Preset",
                    on_change=lambda e, iid=item.id: choose_preset(iid, e.value),
                ).props("outlined dense").classes("w-48")
                ff_input(
                    "Description",
                    value=item.description,
                    error=errors.get(f"items[{index}].description"),
                    on_change=lambda e, iid=item.id: update_item(iid, description=e.value or ""),
                ).classes("flex-1")
                ff_number(
                    "Amount",
                    value=item.amount,
                    error=errors.get(f"items[{index}].amount"),
                    min=0,
                    on_change=lambda e, iid=item.id: update_item(iid, amount=_amount(e.value)),
                ).classes("w-40")
                ui.button(icon="delete", on_click=lambda iid=item.id: remove_item(iid)).props(
                    "flat round dense"
                ).classes("text-slate-500 hover:text-rose-600").set_enabled(len(current().items) > 1)
        ff_btn_secondary("Add item", on_click=add_item, icon="add")

    @ui.refreshable
    def summary() -> None:
        invoice = current()
        totals = invoice_totals(invoice)
        cur = settings.currency
        summary_row("Total", format_money(totals.total, cur))
        summary_row(f"Discount ({invoice.discount:g}%)", format_money(totals.discount_amount, cur))
        summary_row("Final amount", format_money(totals.final_amount, cur), bold=True)
        summary_row("Paid", format_money(invoice.paid_amount, cur))
        summary_row("Due", format_money(totals.due_amount, cur), bold=True)
        with ui.row().classes("w-full justify-end"):
            payment_status_badge(totals.status)

    @ui.refreshable
    def preview() -> None:
        ui.html(build_invoice_preview_html(current(), settings), sanitize=False).classes("w-full")

    @ui.refreshable
    def form() -> None:
        invoice = current()
        errors = state["errors"]
        title = f"Edit invoice #{invoice.invoice_number}" if invoice.id else "Create invoice"

        with ui.row().classes("w-full justify-between items-center"):
            ui.label(title).classes(C_PAGE_TITLE)
            with ui.row().classes("gap-2"):
                ff_btn_secondary("New invoice", on_click=lambda: load(None), icon="note_add")
                ff_btn_secondary("Download PDF", on_click=handle_pdf, icon="picture_as_pdf")
                ff_btn_primary("Save invoice", on_click=handle_save, icon="save")

        with ui.grid(columns=3).classes("w-full gap-6"):
            with ui.column().classes("col-span-2 gap-6"):
                with ff_card():
                    ff_section_title("Invoice")
                    with ui.row().classes("w-full gap-3 flex-nowrap"):
                        ui.input("Invoice no.", value=invoice.invoice_number).props(
                            "outlined dense readonly"
                        ).classes("w-40")
                        ff_input("Date", value=invoice.date, on_change=lambda e: update(date=e.value or "")).props(
                            "type=date"
                        )
                        ff_input("PAN no.", value=invoice.pan_number, on_change=lambda e: update(pan_number=e.value or ""))
                    ui.label(f"{settings.business_name}, {settings.business_address}").classes(STYLE_TEXT_MUTED)

                with ff_card():
                    ff_section_title("Client")
                    with ui.grid(columns=2).classes("w-full gap-3"):
                        ff_input(
                            "Name",
                            value=invoice.client.name,
                            error=errors.get("client.name"),
                            on_change=lambda e: update_client("name", e.value),
                        )
                        ff_input("Email", value=invoice.client.email, on_change=lambda e: update_client("email", e.value))
                        ff_input(
                            "Address",
                            value=invoice.client.address,
                            error=errors.get("client.address"),
                            on_change=lambda e: update_client("address", e.value),
                        )
                        ff_input("Phone", value=invoice.client.phone, on_change=lambda e: update_client("phone", e.value))

                with ff_card():
                    ff_section_title("Items")
                    items_section()

            with ui.column().classes("col-span-1 gap-6"):
                with ff_card():
                    ff_section_title("Summary")
                    ff_number(
                        "Discount (%)",
                        value=invoice.discount,
                        min=0,
                        on_change=lambda e: update(discount=_amount(e.value)),
                    )
                    ff_number(
                        "Paid amount",
                        value=invoice.paid_amount,
                        min=0,
                        on_change=lambda e: update(paid_amount=_amount(e.value)),
                    )
                    summary()

                with ff_card():
                    ff_section_title("Confirmation")
                    ff_input(
                        "Confirmed by",
                        value=invoice.confirmation_name,
                        on_change=lambda e: update(confirmation_name=e.value or ""),
                    )
                    ff_input(
                        "Confirmation date",
                        value=invoice.confirmation_date,
                        on_change=lambda e: update(confirmation_date=e.value or ""),
                    ).props("type=date")

        with ui.expansion("Print preview", icon="print").classes("w-full"):
            with ff_card():
                preview()

    def adopt_external_save(invoice: Invoice) -> None:
        if not current().id or current().id != invoice.id:
            return
        # Keep unsaved form edits; take the stored payment and revision.
        state["invoice"] = current().model_copy(
            update={"paid_amount": invoice.paid_amount, "revision": invoice.revision}
        )
        form.refresh()

    form()
    return InvoiceEditor(load=load, adopt_external_save=adopt_external_save)
