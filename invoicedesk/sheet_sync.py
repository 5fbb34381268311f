from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Iterable, Optional

from invoicedesk.exports import build_sheet_records
from invoicedesk.integrations.sheets_client import post_records
from invoicedesk.models import Invoice
from invoicedesk.settings import Settings


logger = logging.getLogger(__name__)

Records = list[dict[str, Any]]


class SheetSyncQueue:
    """Mirrors the invoice collection to the spreadsheet in the background.

    At most one request is in flight. Submitting while a request runs keeps
    only the newest snapshot, which is sent once the current request ends.
    Local writes never wait on this queue and are never reverted by it.
    """

    def __init__(
        self,
        poster: Callable[[Records], Any],
        on_success: Optional[Callable[[], Any]] = None,
        on_failure: Optional[Callable[[Exception], Any]] = None,
        currency: str = "Rs",
    ) -> None:
        self._poster = poster
        self._on_success = on_success
        self._on_failure = on_failure
        self._currency = currency
        self._pending: Optional[Records] = None
        self._task: Optional[asyncio.Task] = None
        self.last_error: Optional[Exception] = None
        self.sent_count = 0

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, invoices: Iterable[Invoice]) -> asyncio.Task:
        self._pending = build_sheet_records(invoices, self._currency)
        if not self.busy:
            self._task = asyncio.get_running_loop().create_task(self._drain())
        logger.debug("sheet_sync.queued", extra={"records": len(self._pending or [])})
        return self._task

    async def flush(self) -> None:
        if self._task is not None:
            await self._task

    async def _drain(self) -> None:
        while self._pending is not None:
            records, self._pending = self._pending, None
            try:
                await asyncio.to_thread(self._poster, records)
            except Exception as exc:
                self._fail(exc)
                continue
            self.last_error = None
            self.sent_count += 1
            logger.info("sheet_sync.sent", extra={"records": len(records)})
            if self._on_success is not None:
                try:
                    self._on_success()
                except Exception as exc:
                    self._fail(exc)

    def _fail(self, exc: Exception) -> None:
        self.last_error = exc
        logger.exception("sheet_sync.failed", exc_info=exc)
        if self._on_failure is None:
            return
        try:
            self._on_failure(exc)
        except Exception:
            logger.exception("sheet_sync.failure_callback_failed")


def build_sync_queue(settings: Settings, on_success=None, on_failure=None) -> Optional[SheetSyncQueue]:
    if not settings.sync_enabled:
        return None
    poster = functools.partial(
        _post, settings.apps_script_url, timeout_s=settings.sync_timeout_s
    )
    return SheetSyncQueue(poster, on_success=on_success, on_failure=on_failure, currency=settings.currency)


def _post(url: str, records: Records, timeout_s: float) -> None:
    post_records(url, records, timeout_s=timeout_s)
