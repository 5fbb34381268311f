from __future__ import annotations

import pytest

from invoicedesk.formatting import format_date, format_money
from invoicedesk.settings import find_preset, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("INVOICEDESK_APPS_SCRIPT_URL", "INVOICEDESK_PORT", "INVOICEDESK_CURRENCY", "INVOICEDESK_DB_PATH"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.port == 8000
    assert settings.currency == "Rs"
    assert settings.sync_enabled is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVOICEDESK_APPS_SCRIPT_URL", "https://script.example.com/exec")
    monkeypatch.setenv("INVOICEDESK_PORT", "9001")
    monkeypatch.setenv("INVOICEDESK_SYNC_TIMEOUT", "2.5")

    settings = get_settings()

    assert settings.sync_enabled is True
    assert settings.port == 9001
    assert settings.sync_timeout_s == 2.5


def test_invalid_port_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVOICEDESK_PORT", "eighty")
    with pytest.raises(ValueError, match="Invalid INVOICEDESK_PORT"):
        get_settings()


def test_presets() -> None:
    assert find_preset("pte").amount == 6000.0
    assert find_preset("unknown") is None


def test_formatting() -> None:
    assert format_money(6000) == "Rs 6,000"
    assert format_money(1250.5) == "Rs 1,250.50"
    assert format_date("2024-03-05") == "2024/03/05"
    assert format_date("not a date") == "not a date"


def test_log_lines_carry_extra_context() -> None:
    import logging

    from invoicedesk.logging_setup import ContextFormatter

    record = logging.makeLogRecord(
        {"name": "invoicedesk.actions", "levelno": logging.INFO, "levelname": "INFO", "msg": "apply_payment.applied"}
    )
    record.invoice_number = "00001"
    record.amount = 3000.0

    line = ContextFormatter("%(levelname)s %(message)s").format(record)

    assert line == "INFO apply_payment.applied amount=3000.0 invoice_number='00001'"
