from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from invoicedesk.repository import InvoiceRepository
from invoicedesk.settings import Settings, get_settings
from invoicedesk.sheet_sync import SheetSyncQueue, build_sync_queue


@dataclass(frozen=True)
class AppContainer:
    settings: Settings
    repository: InvoiceRepository
    sync: Optional[SheetSyncQueue]


def create_app_container(settings: Optional[Settings] = None) -> AppContainer:
    """Build the repository and sync queue once at startup; pages share them."""
    settings = settings or get_settings()
    repository = InvoiceRepository.from_path(settings.db_path)
    sync = build_sync_queue(settings, on_success=lambda: repository.mark_synced())
    return AppContainer(settings=settings, repository=repository, sync=sync)
