from __future__ import annotations

import csv
import io

from conftest import make_invoice
from invoicedesk.exports import SHEET_COLUMNS, build_sheet_records, export_invoices_csv


def _lines(payload: bytes) -> list[str]:
    return payload.decode("utf-8-sig").splitlines()


def test_csv_has_header_and_one_line_per_invoice() -> None:
    invoices = [make_invoice(number="00001"), make_invoice(number="00002"), make_invoice(number="00003")]

    lines = _lines(export_invoices_csv(invoices))

    assert len(lines) == len(invoices) + 1
    assert lines[0] == ",".join(f'"{col}"' for col in SHEET_COLUMNS)


def test_every_field_is_quoted() -> None:
    lines = _lines(export_invoices_csv([make_invoice(number="00001", paid=100)]))
    row = lines[1]
    assert row.startswith('"00001","2024/03/05","Sita Sharma"')
    assert row.count('"') == 2 * len(SHEET_COLUMNS)


def test_embedded_quotes_are_doubled() -> None:
    payload = export_invoices_csv([make_invoice(name='Ram "RT" Thapa', number="00001")])

    assert '"Ram ""RT"" Thapa"' in payload.decode("utf-8-sig")
    parsed = list(csv.reader(io.StringIO(payload.decode("utf-8-sig"))))
    assert parsed[1][2] == 'Ram "RT" Thapa'


def test_csv_starts_with_bom() -> None:
    assert export_invoices_csv([]).startswith(b"\xef\xbb\xbf")
    assert len(_lines(export_invoices_csv([]))) == 1


def test_sheet_record_values() -> None:
    invoice = make_invoice(amounts=(6000, 1000), discount=10, paid=2000, number="00007")
    invoice.confirmation_name = "Asha"

    record = build_sheet_records([invoice])[0]

    assert list(record) == SHEET_COLUMNS
    assert record["Items"] == "Item 1: Rs 6000; Item 2: Rs 1000"
    assert record["Total Amount"] == 7000
    assert record["Discount (%)"] == 10
    assert record["Final Amount"] == 6300
    assert record["Due Amount"] == 4300
    assert record["Payment Status"] == "Partially Paid"
    assert record["Confirmed By"] == "Asha"
