from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from invoicedesk.errors import InvoiceNotFoundError, InvoiceValidationError, PaymentRangeError
from invoicedesk.invoice_calculations import invoice_totals
from invoicedesk.invoice_numbering import next_invoice_number
from invoicedesk.models import ClientInfo, DiscountType, Invoice, LineItem
from invoicedesk.repository import InvoiceRepository
from invoicedesk.settings import Settings, find_preset


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReceipt:
    invoice: Invoice
    amount: float
    paid_at: datetime
    previous_due: float
    remaining_due: float


def _queue_sync(repo: InvoiceRepository, sync: Any) -> None:
    if sync is None:
        return
    sync.submit(repo.list())


def new_line_item(preset: str = "custom") -> LineItem:
    return LineItem(id=uuid.uuid4().hex, description="", amount=0.0, preset=preset)


def new_draft_invoice(invoices: Iterable[Invoice], settings: Settings, today: Optional[date] = None) -> Invoice:
    day = (today or date.today()).isoformat()
    return Invoice(
        invoice_number=next_invoice_number(invoices),
        date=day,
        pan_number=settings.default_pan,
        client=ClientInfo(),
        items=[LineItem(id="1", description="", amount=0.0, preset="custom")],
        discount=0.0,
        discount_type=DiscountType.PERCENTAGE,
        paid_amount=0.0,
        confirmation_date=day,
    )


def apply_preset(item: LineItem, preset_value: str) -> LineItem:
    preset = find_preset(preset_value)
    if preset is None or preset.value == "custom":
        return item.model_copy(update={"preset": preset_value})
    return item.model_copy(
        update={"preset": preset.value, "description": preset.label, "amount": preset.amount}
    )


def validate_invoice(invoice: Invoice) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not (invoice.client.name or "").strip():
        errors["client.name"] = "Client name is required"
    if not (invoice.client.address or "").strip():
        errors["client.address"] = "Client address is required"
    if not invoice.items:
        errors["items"] = "At least one item is required"
    for index, item in enumerate(invoice.items):
        if not (item.description or "").strip():
            errors[f"items[{index}].description"] = "Description is required"
        if item.amount < 0:
            errors[f"items[{index}].amount"] = "Amount cannot be negative"
    return errors


def save_invoice(repo: InvoiceRepository, invoice: Invoice, sync: Any = None) -> Invoice:
    errors = validate_invoice(invoice)
    if errors:
        logger.info("save_invoice.invalid", extra={"fields": sorted(errors)})
        raise InvoiceValidationError(errors)

    normalized = invoice.model_copy(update={"discount_type": DiscountType.PERCENTAGE})
    saved = repo.save(normalized)
    _queue_sync(repo, sync)
    return saved


def delete_invoice(repo: InvoiceRepository, invoice_id: str, sync: Any = None) -> Invoice:
    removed = repo.delete(invoice_id)
    _queue_sync(repo, sync)
    return removed


def find_invoice(repo: InvoiceRepository, invoice_number: str) -> Invoice:
    number = (invoice_number or "").strip()
    if not number:
        raise InvoiceNotFoundError("Please enter an invoice number")
    invoice = repo.find_by_number(number)
    if invoice is None:
        raise InvoiceNotFoundError(f"No invoice found with number {number}")
    return invoice


def _parse_payment_amount(amount: Any) -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise PaymentRangeError("Please enter a valid payment amount") from None
    if not math.isfinite(value):
        raise PaymentRangeError("Please enter a valid payment amount")
    return value


def apply_payment(
    repo: InvoiceRepository,
    invoice_number: str,
    amount: Any,
    sync: Any = None,
    paid_at: Optional[datetime] = None,
) -> PaymentReceipt:
    invoice = find_invoice(repo, invoice_number)
    raw = _parse_payment_amount(amount)
    totals = invoice_totals(invoice)

    # Range checks use the entered value; only the stored amount is rounded.
    value = round(raw, 2)
    if raw <= 0 or value <= 0:
        raise PaymentRangeError("Please enter a valid payment amount")
    if raw > totals.due_amount:
        raise PaymentRangeError("Payment amount cannot exceed due amount")

    updated = invoice.model_copy(update={"paid_amount": round(invoice.paid_amount + value, 2)})
    saved = repo.save(updated)
    remaining = invoice_totals(saved).due_amount
    logger.info(
        "apply_payment.applied",
        extra={"invoice_number": saved.invoice_number, "amount": value, "remaining": remaining},
    )
    _queue_sync(repo, sync)
    return PaymentReceipt(
        invoice=saved,
        amount=value,
        paid_at=paid_at or datetime.now(),
        previous_due=totals.due_amount,
        remaining_due=remaining,
    )


def search_invoices(invoices: Iterable[Invoice], term: str) -> List[Invoice]:
    needle = (term or "").strip().lower()
    if not needle:
        return list(invoices)
    return [
        inv
        for inv in invoices
        if needle in inv.invoice_number.lower() or needle in inv.client.name.lower()
    ]
