from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from invoicedesk.errors import SheetSyncError


def build_payload(records: list[dict[str, Any]]) -> dict[str, str]:
    return {"data": json.dumps(records, ensure_ascii=False, separators=(",", ":"))}


def post_records(
    webhook_url: str,
    records: list[dict[str, Any]],
    timeout_s: float = 8.0,
    client: Optional[httpx.Client] = None,
) -> httpx.Response:
    """POST the flattened invoice records to the spreadsheet script.

    The body is form-encoded with a single ``data`` field holding the JSON
    array. The script replaces the sheet contents wholesale, and its reply
    body is not inspected.
    """
    webhook_url = (webhook_url or "").strip()
    if not webhook_url:
        raise ValueError("Missing webhook_url")

    form = build_payload(records)
    try:
        if client is not None:
            resp = client.post(webhook_url, data=form, timeout=timeout_s, follow_redirects=True)
        else:
            resp = httpx.post(webhook_url, data=form, timeout=timeout_s, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise SheetSyncError(f"Spreadsheet sync failed: {exc}") from exc
    return resp
