from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from invoicedesk.models import ClientInfo, Invoice, LineItem  # noqa: E402
from invoicedesk.repository import InvoiceRepository  # noqa: E402
from invoicedesk.settings import Settings  # noqa: E402


class RecordingSync:
    """Stands in for the sheet sync queue and keeps every submitted snapshot."""

    def __init__(self) -> None:
        self.snapshots: List[List[Any]] = []

    def submit(self, invoices) -> None:
        self.snapshots.append(list(invoices))


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(db_path=str(tmp_path / "invoices.db"))


@pytest.fixture()
def repo(settings: Settings) -> InvoiceRepository:
    return InvoiceRepository.from_path(settings.db_path)


@pytest.fixture()
def recording_sync() -> RecordingSync:
    return RecordingSync()


def make_invoice(
    name: str = "Sita Sharma",
    address: str = "Lakeside, Pokhara",
    amounts=(5000,),
    discount: float = 0,
    paid: float = 0,
    number: str = "",
) -> Invoice:
    return Invoice(
        invoice_number=number,
        date="2024-03-05",
        pan_number="51825823",
        client=ClientInfo(name=name, address=address, phone="9800000000"),
        items=[
            LineItem(id=str(i + 1), description=f"Item {i + 1}", amount=amount)
            for i, amount in enumerate(amounts)
        ],
        discount=discount,
        paid_amount=paid,
    )
