from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from invoicedesk.models import DiscountType, PaymentStatus


_DECIMAL_PLACES = Decimal("0.01")


def _to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        number = Decimal(str(value).strip() or "0")
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not number.is_finite():
        return Decimal("0")
    return number


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_DECIMAL_PLACES, rounding=ROUND_HALF_UP)


def _item_amount(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("amount", 0)
    return getattr(item, "amount", 0)


@dataclass(frozen=True)
class InvoiceTotals:
    total: float
    discount_amount: float
    final_amount: float
    due_amount: float

    @property
    def status(self) -> PaymentStatus:
        return classify_payment(self.final_amount, self.final_amount - self.due_amount)


def calculate_invoice_totals(
    items: Iterable[Any] | None,
    discount: Any = 0,
    discount_type: DiscountType | str = DiscountType.PERCENTAGE,
    paid_amount: Any = 0,
) -> InvoiceTotals:
    total = Decimal("0")
    for item in items or []:
        total += _to_decimal(_item_amount(item))

    discount_value = _to_decimal(discount)
    if DiscountType.coerce(discount_type) == DiscountType.PERCENTAGE:
        discount_amount = total * discount_value / Decimal("100")
    else:
        discount_amount = discount_value

    total_q = _quantize(total)
    discount_q = _quantize(discount_amount)
    final_q = total_q - discount_q
    due_q = final_q - _quantize(_to_decimal(paid_amount))

    return InvoiceTotals(
        total=float(total_q),
        discount_amount=float(discount_q),
        final_amount=float(final_q),
        due_amount=float(due_q),
    )


def invoice_totals(invoice: Any) -> InvoiceTotals:
    return calculate_invoice_totals(
        invoice.items,
        discount=invoice.discount,
        discount_type=invoice.discount_type,
        paid_amount=invoice.paid_amount,
    )


def classify_payment(final_amount: Any, paid_amount: Any) -> PaymentStatus:
    final_q = _quantize(_to_decimal(final_amount))
    paid_q = _quantize(_to_decimal(paid_amount))
    if paid_q >= final_q:
        return PaymentStatus.PAID
    if paid_q > 0:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def invoice_status(invoice: Any) -> PaymentStatus:
    return invoice_totals(invoice).status
