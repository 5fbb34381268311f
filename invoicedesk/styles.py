# =========================
# INVOICEDESK/STYLES.PY
# =========================

from __future__ import annotations

"""
Design tokens for the NiceGUI pages (light slate).

Rules:
- Prefer the C_* constants or the wrappers in `ui_components.py` over inline class strings.
- Outer cards own padding; inner layout uses gap only.
"""

C_FONT_STACK = '"Inter", system-ui, -apple-system, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif'

# CSS braces are doubled for the f-string.
APP_FONT_CSS = f"""
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
<style>
  :root, body, .q-body {{
    font-family: {C_FONT_STACK};
    letter-spacing: -0.01em;
    color-scheme: light;
    --id-bg: #f8fafc;
    --id-border: #e2e8f0;
    --id-text: #0f172a;
  }}
  body, .q-body, .nicegui-content {{
    background: var(--id-bg) !important;
    color: var(--id-text) !important;
  }}
  .q-card {{ box-shadow: none !important; }}
  .invoice-receipt table td, .invoice-receipt table th {{ padding: 2px 0; }}
</style>
"""

STYLE_BG = "bg-slate-50 text-slate-900 min-h-screen"
STYLE_CONTAINER = "w-full max-w-6xl mx-auto px-6 py-6 gap-6"

STYLE_CARD = "bg-white border border-slate-200 shadow-sm rounded-xl"

STYLE_PAGE_TITLE = "text-2xl font-bold tracking-tight text-slate-900"
STYLE_SECTION_TITLE = "text-sm font-semibold text-slate-900"
STYLE_TEXT_MUTED = "text-sm text-slate-600"

STYLE_BTN_PRIMARY = (
    "bg-slate-900 text-white hover:bg-slate-800 active:scale-[0.99] rounded-lg px-4 py-2 text-sm "
    "font-semibold transition-all focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-amber-400/40"
)
STYLE_BTN_SECONDARY = (
    "bg-white text-slate-900 border border-slate-200 hover:bg-slate-50 active:scale-[0.99] rounded-lg px-4 py-2 "
    "text-sm font-semibold transition-all focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-slate-400/30"
)
STYLE_BTN_DANGER = (
    "bg-rose-600 text-white hover:bg-rose-700 active:scale-[0.99] rounded-lg px-4 py-2 text-sm "
    "font-semibold transition-all focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-rose-500/30"
)

STYLE_INPUT = "w-full text-sm"

STYLE_TABLE_HEADER = "w-full px-3 py-2 text-xs font-semibold uppercase tracking-wider text-slate-600 border-b border-slate-200"
STYLE_TABLE_ROW = "w-full px-3 py-2 text-sm text-slate-800 border-b border-slate-200/70"

STYLE_BADGE_GREEN = "bg-emerald-50 text-emerald-700 border border-emerald-200 px-2 py-0.5 rounded-full text-xs font-medium text-center"
STYLE_BADGE_YELLOW = "bg-amber-50 text-amber-700 border border-amber-200 px-2 py-0.5 rounded-full text-xs font-medium text-center"
STYLE_BADGE_RED = "bg-rose-50 text-rose-700 border border-rose-200 px-2 py-0.5 rounded-full text-xs font-medium text-center"

# Short aliases used by the pages
C_BG = STYLE_BG
C_CONTAINER = STYLE_CONTAINER
C_CARD = STYLE_CARD
C_BTN_PRIM = STYLE_BTN_PRIMARY
C_BTN_SEC = STYLE_BTN_SECONDARY
C_BTN_DANGER = STYLE_BTN_DANGER
C_INPUT = STYLE_INPUT
C_BADGE_GREEN = STYLE_BADGE_GREEN
C_BADGE_YELLOW = STYLE_BADGE_YELLOW
C_BADGE_RED = STYLE_BADGE_RED
C_PAGE_TITLE = STYLE_PAGE_TITLE
C_SECTION_TITLE = STYLE_SECTION_TITLE
C_TABLE_HEADER = STYLE_TABLE_HEADER
C_TABLE_ROW = STYLE_TABLE_ROW
