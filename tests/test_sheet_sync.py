from __future__ import annotations

import asyncio
import json
import threading
from urllib.parse import parse_qs

import httpx
import pytest

from conftest import make_invoice
from invoicedesk.errors import SheetSyncError
from invoicedesk.integrations.sheets_client import build_payload, post_records
from invoicedesk.settings import Settings
from invoicedesk.sheet_sync import SheetSyncQueue, build_sync_queue


URL = "https://script.example.com/macros/s/abc/exec"


def test_post_sends_form_encoded_json() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["content-type"]
        seen["form"] = parse_qs(request.content.decode("utf-8"))
        return httpx.Response(200, text="ok")

    records = [{"Invoice No": "00001", "Client Name": "Sita & Co"}]
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        post_records(URL, records, client=client)

    assert seen["content_type"].startswith("application/x-www-form-urlencoded")
    assert json.loads(seen["form"]["data"][0]) == records


def test_build_payload_has_single_data_field() -> None:
    payload = build_payload([])
    assert payload == {"data": "[]"}


def test_http_errors_are_wrapped() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    with httpx.Client(transport=transport) as client:
        with pytest.raises(SheetSyncError):
            post_records(URL, [], client=client)


def test_missing_url_is_rejected() -> None:
    with pytest.raises(ValueError, match="Missing webhook_url"):
        post_records("  ", [])


def test_sync_disabled_without_url() -> None:
    assert build_sync_queue(Settings(apps_script_url="")) is None
    assert isinstance(build_sync_queue(Settings(apps_script_url=URL)), SheetSyncQueue)


def test_queue_keeps_only_newest_snapshot_while_busy() -> None:
    sent = []
    started = threading.Event()
    release = threading.Event()
    successes = []

    def poster(records):
        sent.append(records)
        started.set()
        release.wait(timeout=5)

    async def scenario() -> SheetSyncQueue:
        queue = SheetSyncQueue(poster, on_success=lambda: successes.append(True))
        queue.submit([make_invoice(number="00001")])
        await asyncio.to_thread(started.wait, 5)
        assert queue.busy
        queue.submit([make_invoice(number="00001"), make_invoice(number="00002")])
        queue.submit([make_invoice(number="00001"), make_invoice(number="00002"), make_invoice(number="00003")])
        release.set()
        await queue.flush()
        return queue

    queue = asyncio.run(scenario())

    assert [len(records) for records in sent] == [1, 3]
    assert queue.sent_count == 2
    assert len(successes) == 2
    assert not queue.busy


def test_queue_reports_failure_then_recovers() -> None:
    failures = []
    calls = {"n": 0}

    def poster(records):
        calls["n"] += 1
        if calls["n"] == 1:
            raise SheetSyncError("Spreadsheet sync failed: boom")

    async def scenario() -> SheetSyncQueue:
        queue = SheetSyncQueue(poster, on_failure=failures.append)
        queue.submit([make_invoice()])
        await queue.flush()
        assert isinstance(queue.last_error, SheetSyncError)
        assert queue.sent_count == 0
        queue.submit([make_invoice()])
        await queue.flush()
        return queue

    queue = asyncio.run(scenario())

    assert len(failures) == 1
    assert queue.last_error is None
    assert queue.sent_count == 1



def test_unexpected_poster_error_keeps_queue_running() -> None:
    failures = []
    sent = []
    started = threading.Event()
    release = threading.Event()

    def poster(records):
        if not sent:
            sent.append(None)
            started.set()
            release.wait(timeout=5)
            raise httpx.InvalidURL("bad url")
        sent.append(records)

    async def scenario() -> SheetSyncQueue:
        queue = SheetSyncQueue(poster, on_failure=failures.append)
        queue.submit([make_invoice(number="00001")])
        await asyncio.to_thread(started.wait, 5)
        queue.submit([make_invoice(number="00001"), make_invoice(number="00002")])
        release.set()
        await queue.flush()
        return queue

    queue = asyncio.run(scenario())

    assert len(failures) == 1
    assert isinstance(failures[0], httpx.InvalidURL)
    assert len(sent[1]) == 2
    assert queue.sent_count == 1
    assert queue.last_error is None
    assert not queue.busy


def test_failing_success_callback_is_reported() -> None:
    failures = []

    def on_success():
        raise RuntimeError("disk full")

    async def scenario() -> SheetSyncQueue:
        queue = SheetSyncQueue(lambda records: None, on_success=on_success, on_failure=failures.append)
        queue.submit([make_invoice()])
        await queue.flush()
        return queue

    queue = asyncio.run(scenario())

    assert queue.sent_count == 1
    assert isinstance(queue.last_error, RuntimeError)
    assert len(failures) == 1

def test_successful_sync_updates_last_sync_time(repo) -> None:
    async def scenario() -> None:
        queue = SheetSyncQueue(lambda records: None, on_success=lambda: repo.mark_synced())
        queue.submit(repo.list())
        await queue.flush()

    asyncio.run(scenario())
    assert repo.last_sync_time is not None
