import unittest

from conftest import make_invoice
from invoicedesk.invoice_calculations import (
    calculate_invoice_totals,
    classify_payment,
    invoice_status,
    invoice_totals,
)
from invoicedesk.models import DiscountType, PaymentStatus


class InvoiceCalculationsTests(unittest.TestCase):
    def test_percentage_discount(self) -> None:
        items = [{"amount": 6000}, {"amount": 1000}]
        totals = calculate_invoice_totals(items, discount=10, paid_amount=2000)
        self.assertEqual(totals.total, 7000.0)
        self.assertEqual(totals.discount_amount, 700.0)
        self.assertEqual(totals.final_amount, 6300.0)
        self.assertEqual(totals.due_amount, 4300.0)

    def test_fixed_discount(self) -> None:
        totals = calculate_invoice_totals([{"amount": 6000}], discount=500, discount_type=DiscountType.FIXED)
        self.assertEqual(totals.discount_amount, 500.0)
        self.assertEqual(totals.final_amount, 5500.0)

    def test_invalid_amounts_count_as_zero(self) -> None:
        items = [{"amount": "abc"}, {"amount": None}, {"amount": "250"}, {}]
        totals = calculate_invoice_totals(items, discount="x", paid_amount="")
        self.assertEqual(totals.total, 250.0)
        self.assertEqual(totals.discount_amount, 0.0)
        self.assertEqual(totals.due_amount, 250.0)

    def test_empty_items(self) -> None:
        totals = calculate_invoice_totals([])
        self.assertEqual(totals.total, 0.0)
        self.assertEqual(totals.final_amount, 0.0)
        self.assertEqual(totals.status, PaymentStatus.PAID)

    def test_rounds_to_cents(self) -> None:
        totals = calculate_invoice_totals([{"amount": 99.99}], discount=15)
        self.assertAlmostEqual(totals.discount_amount, 15.0, places=2)
        self.assertAlmostEqual(totals.final_amount, 84.99, places=2)

    def test_items_as_objects(self) -> None:
        invoice = make_invoice(amounts=(3000, 2000), discount=10, paid=1500)
        totals = invoice_totals(invoice)
        self.assertEqual(totals.final_amount, 4500.0)
        self.assertEqual(totals.due_amount, 3000.0)

    def test_unknown_discount_mode_counts_as_percentage(self) -> None:
        for mode in ("", None, "bogus"):
            totals = calculate_invoice_totals([{"amount": 100}], discount=10, discount_type=mode)
            self.assertEqual(totals.discount_amount, 10.0)
            self.assertEqual(totals.final_amount, 90.0)


class PaymentStatusTests(unittest.TestCase):
    def test_boundaries(self) -> None:
        self.assertEqual(classify_payment(5000, 5000), PaymentStatus.PAID)
        self.assertEqual(classify_payment(5000, 6000), PaymentStatus.PAID)
        self.assertEqual(classify_payment(5000, 0.01), PaymentStatus.PARTIAL)
        self.assertEqual(classify_payment(5000, 0), PaymentStatus.UNPAID)

    def test_labels(self) -> None:
        self.assertEqual(PaymentStatus.PAID.label, "Paid")
        self.assertEqual(PaymentStatus.PARTIAL.label, "Partially Paid")
        self.assertEqual(PaymentStatus.UNPAID.label, "Unpaid")

    def test_paid_exactly_when_nothing_is_due(self) -> None:
        cases = [(0, 0), (100, 0), (100, 50), (100, 100), (99.99, 99.99), (3333.33, 3333.34), (10, 0.1 + 0.2)]
        for amount, paid in cases:
            totals = calculate_invoice_totals([{"amount": amount}], paid_amount=paid)
            self.assertEqual(totals.status == PaymentStatus.PAID, totals.due_amount <= 0, (amount, paid))

    def test_invoice_status(self) -> None:
        self.assertEqual(invoice_status(make_invoice(amounts=(5000,), paid=2000)), PaymentStatus.PARTIAL)
        self.assertEqual(invoice_status(make_invoice(amounts=(5000,), paid=5000)), PaymentStatus.PAID)
        self.assertEqual(invoice_status(make_invoice(amounts=(5000,))), PaymentStatus.UNPAID)


if __name__ == "__main__":
    unittest.main()
