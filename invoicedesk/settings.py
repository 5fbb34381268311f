from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ItemPreset:
    value: str
    label: str
    amount: float


ITEM_PRESETS: Tuple[ItemPreset, ...] = (
    ItemPreset("custom", "Custom", 0.0),
    ItemPreset("ielts", "IELTS Class", 6000.0),
    ItemPreset("pte", "PTE Class", 6000.0),
    ItemPreset("toefl", "TOEFL Class", 5000.0),
    ItemPreset("consultation", "Consultation", 1000.0),
    ItemPreset("document", "Document Processing", 3000.0),
)


@dataclass(frozen=True)
class Settings:
    db_path: str = "storage/invoicedesk.db"
    apps_script_url: str = ""
    sheet_url: str = ""
    business_name: str = "AbroadDesk Consultancy Pvt. Ltd."
    business_address: str = "Newroad, Pokhara"
    default_pan: str = "51825823"
    currency: str = "Rs"
    sync_timeout_s: float = 8.0
    port: int = 8000
    storage_secret: str = "invoicedesk-local"
    debug: bool = False
    presets: Tuple[ItemPreset, ...] = field(default=ITEM_PRESETS)

    @property
    def sync_enabled(self) -> bool:
        return bool(self.apps_script_url)


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name} value: {raw}") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name} value: {raw}") from exc


def get_settings() -> Settings:
    defaults = Settings()
    return Settings(
        db_path=_env_str("INVOICEDESK_DB_PATH", defaults.db_path) or defaults.db_path,
        apps_script_url=_env_str("INVOICEDESK_APPS_SCRIPT_URL", ""),
        sheet_url=_env_str("INVOICEDESK_SHEET_URL", ""),
        business_name=_env_str("INVOICEDESK_BUSINESS_NAME", defaults.business_name),
        business_address=_env_str("INVOICEDESK_BUSINESS_ADDRESS", defaults.business_address),
        default_pan=_env_str("INVOICEDESK_DEFAULT_PAN", defaults.default_pan),
        currency=_env_str("INVOICEDESK_CURRENCY", defaults.currency) or defaults.currency,
        sync_timeout_s=_env_float("INVOICEDESK_SYNC_TIMEOUT", defaults.sync_timeout_s),
        port=_env_int("INVOICEDESK_PORT", defaults.port),
        storage_secret=_env_str("INVOICEDESK_STORAGE_SECRET", defaults.storage_secret) or defaults.storage_secret,
        debug=os.getenv("INVOICEDESK_DEBUG") == "1",
    )


def find_preset(value: str | None) -> ItemPreset | None:
    for preset in ITEM_PRESETS:
        if preset.value == value:
            return preset
    return None
