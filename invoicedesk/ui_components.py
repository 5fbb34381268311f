from __future__ import annotations

from typing import Any, Callable, Optional

from nicegui import ui

from invoicedesk.models import PaymentStatus
from invoicedesk.styles import (
    APP_FONT_CSS,
    C_BADGE_GREEN,
    C_BADGE_RED,
    C_BADGE_YELLOW,
    C_BTN_DANGER,
    C_BTN_PRIM,
    C_BTN_SEC,
    C_CARD,
    C_INPUT,
    C_SECTION_TITLE,
)


_STATUS_BADGES = {
    PaymentStatus.PAID: C_BADGE_GREEN,
    PaymentStatus.PARTIAL: C_BADGE_YELLOW,
    PaymentStatus.UNPAID: C_BADGE_RED,
}


def apply_global_ui_theme() -> None:
    ui.add_head_html(APP_FONT_CSS)


def format_payment_status(status: PaymentStatus | str | None) -> str:
    if status is None:
        return "-"
    try:
        return PaymentStatus(status).label
    except ValueError:
        return str(status)


def payment_status_badge(status: PaymentStatus | str | None) -> ui.label:
    try:
        cls = _STATUS_BADGES[PaymentStatus(status)]
    except (KeyError, ValueError):
        cls = C_BADGE_RED
    return ui.label(format_payment_status(status)).classes(cls)


def ff_card(pad: str = "p-5", classes: str = "") -> ui.card:
    return ui.card().classes(f"{C_CARD} {pad} w-full {classes}".strip())


def ff_section_title(text: str) -> ui.label:
    return ui.label(text).classes(C_SECTION_TITLE)


def _button(text: str, style: str, on_click: Optional[Callable[..., Any]], icon: Optional[str], classes: str) -> ui.button:
    btn = ui.button(text, on_click=on_click, icon=icon).props("flat no-caps")
    return btn.classes(f"{style} {classes}".strip())


def ff_btn_primary(text: str, on_click: Optional[Callable[..., Any]] = None, icon: Optional[str] = None, classes: str = "") -> ui.button:
    return _button(text, C_BTN_PRIM, on_click, icon, classes)


def ff_btn_secondary(text: str, on_click: Optional[Callable[..., Any]] = None, icon: Optional[str] = None, classes: str = "") -> ui.button:
    return _button(text, C_BTN_SEC, on_click, icon, classes)


def ff_btn_danger(text: str, on_click: Optional[Callable[..., Any]] = None, icon: Optional[str] = None, classes: str = "") -> ui.button:
    return _button(text, C_BTN_DANGER, on_click, icon, classes)


def ff_input(label: str, value: str = "", error: Optional[str] = None, **kwargs: Any) -> ui.input:
    """Outlined text input; `error` shows a Quasar inline message under the field."""
    field = ui.input(label, value=value, **kwargs).props("outlined dense").classes(C_INPUT)
    if error:
        field.props(f'error error-message="{error}"')
    return field


def ff_number(label: str, value: float = 0.0, error: Optional[str] = None, **kwargs: Any) -> ui.number:
    field = ui.number(label, value=value, **kwargs).props("outlined dense").classes(C_INPUT)
    if error:
        field.props(f'error error-message="{error}"')
    return field


def summary_row(label: str, value: str, bold: bool = False) -> None:
    weight = "font-semibold" if bold else ""
    with ui.row().classes("w-full justify-between items-center"):
        ui.label(label).classes(f"text-sm text-slate-600 {weight}".strip())
        ui.label(value).classes(f"text-sm text-slate-900 tabular-nums {weight}".strip())
