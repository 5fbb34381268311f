from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.engine import Engine

from invoicedesk.data import (
    INVOICES_KEY,
    LAST_SYNC_KEY,
    create_storage_engine,
    get_session,
    read_entry,
    write_entry,
)
from invoicedesk.errors import InvoiceConflictError, InvoiceNotFoundError
from invoicedesk.invoice_numbering import next_invoice_number
from invoicedesk.models import Invoice, dump_invoices, load_invoices


logger = logging.getLogger(__name__)


class InvoiceRepository:
    """Owns the invoice collection and writes it through on every change.

    The whole collection is stored as one JSON blob under a fixed key. Every
    mutation builds the new collection, persists it, and only then replaces
    the in-memory state, so a failed write keeps the last-known-good list.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._invoices: List[Invoice] = []
        self._last_sync_time: Optional[str] = None

    @classmethod
    def from_path(cls, db_path: str) -> "InvoiceRepository":
        repo = cls(create_storage_engine(db_path))
        repo.load()
        return repo

    def load(self) -> List[Invoice]:
        with get_session(self._engine) as session:
            raw = read_entry(session, INVOICES_KEY)
            last_sync = read_entry(session, LAST_SYNC_KEY)

        invoices: List[Invoice] = []
        if raw:
            try:
                invoices, skipped = load_invoices(raw)
            except ValueError as exc:
                logger.error("repository.load_failed", exc_info=exc)
                invoices = []
            else:
                if skipped:
                    logger.warning("repository.records_skipped", extra={"positions": skipped})

        self._invoices = invoices
        self._last_sync_time = last_sync or None
        logger.info("repository.loaded", extra={"count": len(invoices)})
        return self.list()

    def list(self) -> List[Invoice]:
        return [inv.model_copy(deep=True) for inv in self._invoices]

    def get(self, invoice_id: str) -> Optional[Invoice]:
        for inv in self._invoices:
            if inv.id == invoice_id:
                return inv.model_copy(deep=True)
        return None

    def find_by_number(self, invoice_number: str) -> Optional[Invoice]:
        for inv in self._invoices:
            if inv.invoice_number == invoice_number:
                return inv.model_copy(deep=True)
        return None

    def save(self, invoice: Invoice) -> Invoice:
        stored = invoice.model_copy(deep=True)
        if not stored.id:
            stored.id = uuid.uuid4().hex
            stored.invoice_number = next_invoice_number(self._invoices)
            stored.created_at = datetime.now(timezone.utc).isoformat()
            updated = [*self._invoices, stored]
            logger.info("repository.created", extra={"invoice_number": stored.invoice_number})
        else:
            existing = next((inv for inv in self._invoices if inv.id == stored.id), None)
            if existing is None:
                raise InvoiceNotFoundError(f"No invoice with id {stored.id}")
            if existing.revision != stored.revision:
                raise InvoiceConflictError(
                    f"Invoice #{existing.invoice_number} was changed since it was opened. Reload it before saving."
                )
            updated = [stored if inv.id == stored.id else inv for inv in self._invoices]
            logger.info("repository.updated", extra={"invoice_number": stored.invoice_number})

        stored.revision = uuid.uuid4().hex
        self._persist(updated)
        return stored.model_copy(deep=True)

    def delete(self, invoice_id: str) -> Invoice:
        removed = next((inv for inv in self._invoices if inv.id == invoice_id), None)
        if removed is None:
            raise InvoiceNotFoundError(f"No invoice with id {invoice_id}")
        self._persist([inv for inv in self._invoices if inv.id != invoice_id])
        logger.info("repository.deleted", extra={"invoice_number": removed.invoice_number})
        return removed

    @property
    def last_sync_time(self) -> Optional[str]:
        return self._last_sync_time

    def mark_synced(self, when: Optional[datetime] = None) -> str:
        stamp = (when or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        with get_session(self._engine) as session:
            write_entry(session, LAST_SYNC_KEY, stamp)
            session.commit()
        self._last_sync_time = stamp
        return stamp

    def _persist(self, invoices: List[Invoice]) -> None:
        payload = dump_invoices(invoices)
        with get_session(self._engine) as session:
            write_entry(session, INVOICES_KEY, payload)
            session.commit()
        self._invoices = invoices
