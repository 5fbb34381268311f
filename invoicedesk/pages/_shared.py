from __future__ import annotations

from nicegui import ui

from invoicedesk.container import AppContainer


async def report_sync(container: AppContainer) -> None:
    """Wait for the queued spreadsheet upload and tell the operator how it went."""
    queue = container.sync
    if queue is None:
        return
    await queue.flush()
    if queue.last_error is not None:
        ui.notify("Spreadsheet update failed. Your data is still saved locally.", color="orange")
    else:
        ui.notify("Data has been saved to the spreadsheet", color="green")


def download_bytes(payload: bytes, filename: str, media_type: str) -> None:
    ui.download.content(payload, filename=filename, media_type=media_type)
