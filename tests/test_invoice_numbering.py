from __future__ import annotations

from types import SimpleNamespace

from invoicedesk.invoice_numbering import (
    build_invoice_filename,
    format_invoice_number,
    next_invoice_number,
    parse_invoice_number,
)


def test_next_number_follows_highest() -> None:
    assert next_invoice_number(["00001", "00003"]) == "00004"


def test_next_number_for_empty_collection() -> None:
    assert next_invoice_number([]) == "00001"


def test_unparsable_numbers_count_as_zero() -> None:
    assert parse_invoice_number("abc") == 0
    assert parse_invoice_number("") == 0
    assert parse_invoice_number(None) == 0
    assert parse_invoice_number("00012x") == 12
    assert next_invoice_number(["abc", ""]) == "00001"


def test_next_number_accepts_dicts_and_objects() -> None:
    invoices = [{"invoiceNumber": "00007"}, SimpleNamespace(invoice_number="00002")]
    assert next_invoice_number(invoices) == "00008"


def test_numbers_wider_than_five_digits_keep_growing() -> None:
    assert format_invoice_number(123456) == "123456"
    assert next_invoice_number(["99999"]) == "100000"


def test_invoice_filename() -> None:
    assert build_invoice_filename("00001") == "Invoice-00001.pdf"
    assert build_invoice_filename(SimpleNamespace(invoice_number="00/2")) == "Invoice-00-2.pdf"
    assert build_invoice_filename("") == "Invoice.pdf"
